"""
序列化模块
负责节点表的导出与导入
"""

from .base import Serializer, Deserializer
from .json_serializer import JSONSerializer

__all__ = [
    'Serializer',
    'Deserializer',
    'JSONSerializer'
]

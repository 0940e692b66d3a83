"""
数据模块
包含序列化等数据相关功能
"""

from .serializer import JSONSerializer

__all__ = ['JSONSerializer']

"""
接口定义包
"""

from .inode import INode
from .iprovider import IIdProvider
from .ilistener import IChangeListener
from .istore import INodeStore

__all__ = [
    'INode',
    'IIdProvider',
    'IChangeListener',
    'INodeStore'
]

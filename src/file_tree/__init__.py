"""
虚拟文件树节点存储 - 基于平铺节点表和ID引用的树结构
"""

__version__ = "1.0.0"

from .core.node import NodeStore, NodeType, FileNode, DirectoryNode, SearchResult
from .system import FileTreeSystem

__all__ = [
    'FileTreeSystem',
    'NodeStore',
    'NodeType',
    'FileNode',
    'DirectoryNode',
    'SearchResult',
]

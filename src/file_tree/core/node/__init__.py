"""
节点模块 - 节点实体、工厂和存储
"""

from .entity import NodeType, FileNode, DirectoryNode, SearchResult, node_from_dict
from .factory import NodeFactory
from .store import NodeStore

__all__ = [
    'NodeType',
    'FileNode',
    'DirectoryNode',
    'SearchResult',
    'node_from_dict',
    'NodeFactory',
    'NodeStore',
]

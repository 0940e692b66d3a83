"""
核心模块包
包含节点、ID分配、变更通知等核心实现
"""

# 导入ID模块
from .ids import NameBasedIdProvider, RandomIdProvider

# 导入事件模块
from .events import ChangeType, ChangeEvent, ChangeNotifier

# 导入节点模块
from .node import NodeType, FileNode, DirectoryNode, SearchResult, NodeFactory, NodeStore

__all__ = [
    # ID模块
    'NameBasedIdProvider',
    'RandomIdProvider',

    # 事件模块
    'ChangeType',
    'ChangeEvent',
    'ChangeNotifier',

    # 节点模块
    'NodeType',
    'FileNode',
    'DirectoryNode',
    'SearchResult',
    'NodeFactory',
    'NodeStore',
]

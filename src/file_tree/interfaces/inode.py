"""
节点接口定义
"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class INode(ABC):
    """节点接口 - 文件与目录的统一抽象，以 type 字段区分变体"""

    id: str
    name: str

    @property
    @abstractmethod
    def node_type(self):
        """节点类型标签（NodeType）"""
        pass

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        """是否为目录"""
        pass

    @abstractmethod
    def copy(self) -> 'INode':
        """返回节点的独立副本"""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """
        转换为字典

        Returns:
            可JSON序列化的节点字典
        """
        pass

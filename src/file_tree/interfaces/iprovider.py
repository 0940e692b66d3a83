"""
节点ID提供者接口
"""
from abc import ABC, abstractmethod
from typing import Callable


class IIdProvider(ABC):
    """节点ID分配器接口 - 为新节点生成全局唯一的ID"""

    @abstractmethod
    def allocate(self, name: str, is_taken: Callable[[str], bool]) -> str:
        """
        为新节点分配ID

        Args:
            name: 新节点的显示名称（含扩展名）
            is_taken: 判断ID是否已被占用的谓词

        Returns:
            未被占用的节点ID

        Raises:
            NodeIdConflictError: 无法分配不冲突的ID
        """
        pass

    @abstractmethod
    def validate_id(self, node_id: str) -> bool:
        """
        验证ID格式是否有效

        Args:
            node_id: 待验证的ID

        Returns:
            是否有效
        """
        pass

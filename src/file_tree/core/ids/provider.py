"""
节点ID提供者实现
"""
import os
import uuid
from typing import Callable

from ...interfaces import IIdProvider
from ...exceptions import NodeIdConflictError


class NameBasedIdProvider(IIdProvider):
    """
    基于名称的确定性ID提供者

    以节点名称作为ID，冲突时在扩展名前追加数字后缀，例如：
    new.md -> new-1.md -> new-2.md
    components -> components-1
    """

    def __init__(self, separator: str = "-", max_attempts: int = 1000,
                 reject_on_conflict: bool = False):
        """
        初始化ID提供者

        Args:
            separator: 名称与数字后缀之间的分隔符
            max_attempts: 冲突时最多尝试的后缀个数
            reject_on_conflict: 冲突时直接拒绝而不追加后缀
        """
        self._separator = separator
        self._max_attempts = max_attempts
        self._reject_on_conflict = reject_on_conflict

    def allocate(self, name: str, is_taken: Callable[[str], bool]) -> str:
        if not is_taken(name):
            return name

        if self._reject_on_conflict:
            raise NodeIdConflictError(node_id=name, reason="ID已存在")

        stem, ext = os.path.splitext(name)
        for suffix in range(1, self._max_attempts + 1):
            candidate = f"{stem}{self._separator}{suffix}{ext}"
            if not is_taken(candidate):
                return candidate

        raise NodeIdConflictError(
            node_id=name,
            reason=f"尝试{self._max_attempts}个后缀后仍然冲突"
        )

    def validate_id(self, node_id: str) -> bool:
        return isinstance(node_id, str) and bool(node_id) and '/' not in node_id


class RandomIdProvider(IIdProvider):
    """随机ID提供者，使用截断的uuid4"""

    def __init__(self, length: int = 8, max_attempts: int = 100):
        self._length = length
        self._max_attempts = max_attempts

    def allocate(self, name: str, is_taken: Callable[[str], bool]) -> str:
        for _ in range(self._max_attempts):
            candidate = uuid.uuid4().hex[:self._length]
            if not is_taken(candidate):
                return candidate

        raise NodeIdConflictError(
            node_id=name,
            reason=f"随机ID连续{self._max_attempts}次冲突"
        )

    def validate_id(self, node_id: str) -> bool:
        if not isinstance(node_id, str) or len(node_id) != self._length:
            return False
        try:
            int(node_id, 16)
        except ValueError:
            return False
        return True


def create_id_provider(strategy: str = "name", on_conflict: str = "suffix",
                       separator: str = "-") -> IIdProvider:
    """
    按配置创建ID提供者

    Args:
        strategy: 'name' 或 'uuid'
        on_conflict: 'suffix' 或 'reject'（仅对 'name' 生效）
        separator: 后缀分隔符
    """
    if strategy == "name":
        return NameBasedIdProvider(
            separator=separator,
            reject_on_conflict=(on_conflict == "reject")
        )
    elif strategy == "uuid":
        return RandomIdProvider()

    raise ValueError(f"不支持的ID分配策略: {strategy}")

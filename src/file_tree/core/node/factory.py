"""
节点工厂 - 创建节点和构建节点表
"""
from typing import Dict, Any, Callable, Iterable, Mapping, Optional, Union

from ...interfaces import IIdProvider, INode
from ...config.validator import NameValidator
from ...exceptions import ValidationError, TreeIntegrityError
from .entity import FileNode, DirectoryNode, node_from_dict


NodeSource = Union[INode, Dict[str, Any]]


class NodeFactory:
    """节点工厂，负责分配ID并创建节点"""

    def __init__(self, id_provider: IIdProvider, validator: Optional[NameValidator] = None):
        """
        初始化节点工厂

        Args:
            id_provider: 节点ID提供者
            validator: 名称验证器，构建节点表时逐个校验名称
        """
        self._id_provider = id_provider
        self._validator = validator or NameValidator()

    @property
    def id_provider(self) -> IIdProvider:
        return self._id_provider

    def create_file(self, name: str, is_taken: Callable[[str], bool]) -> FileNode:
        """创建文件节点（尚未挂入任何目录）"""
        return FileNode(id=self._allocate(name, is_taken), name=name)

    def create_directory(self, name: str, is_taken: Callable[[str], bool]) -> DirectoryNode:
        """创建空目录节点（尚未挂入任何目录）"""
        return DirectoryNode(id=self._allocate(name, is_taken), name=name)

    def _allocate(self, name: str, is_taken: Callable[[str], bool]) -> str:
        node_id = self._id_provider.allocate(name, is_taken)
        if not self._id_provider.validate_id(node_id):
            raise TreeIntegrityError("ID提供者返回了无效的ID", node_id=str(node_id))
        return node_id

    def build_table(self, source: Union[Iterable[NodeSource], Mapping[str, NodeSource]]) -> Dict[str, INode]:
        """
        从节点序列或 id->节点 映射构建一张新的节点表

        输入中的节点对象会被复制，构建结果与输入互不影响。
        这里保证ID唯一、名称合法，树结构由存储统一校验。
        """
        if isinstance(source, Mapping):
            items = list(source.items())
        else:
            items = [(None, item) for item in source]

        table: Dict[str, INode] = {}
        for key, item in items:
            # 节点对象也走一遍字典校验，与导入的数据同等对待
            node = node_from_dict(item.to_dict() if isinstance(item, INode) else item)
            self._validator.validate_name(node.name, field="name")

            if key is not None and key != node.id:
                raise ValidationError(
                    message=f"节点表键与节点ID不一致: {key} != {node.id}",
                    field="id",
                    value=node.id,
                    reason="key_mismatch"
                )

            if node.id in table:
                raise ValidationError(
                    message=f"节点ID重复: {node.id}",
                    field="id",
                    value=node.id,
                    reason="duplicate_id"
                )

            table[node.id] = node

        return table

"""
树节点实体模块
定义文件与目录两种节点变体，节点之间只通过ID相互引用
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, NamedTuple

from ...interfaces import INode
from ...exceptions import ValidationError


PATH_SEPARATOR = "/"


class NodeType(Enum):
    """节点类型标签"""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class FileNode(INode):
    """文件节点 - 叶子节点，没有子节点"""

    id: str
    name: str
    type: NodeType = field(default=NodeType.FILE, init=False)

    @property
    def node_type(self) -> NodeType:
        return self.type

    @property
    def is_directory(self) -> bool:
        return False

    def copy(self) -> 'FileNode':
        return FileNode(id=self.id, name=self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'name': self.name,
        }


@dataclass
class DirectoryNode(INode):
    """
    目录节点 - 内部节点

    children 是有序的子节点ID列表，只表示关系，不持有子节点对象。
    """

    id: str
    name: str
    children: List[str] = field(default_factory=list)
    type: NodeType = field(default=NodeType.DIRECTORY, init=False)

    @property
    def node_type(self) -> NodeType:
        return self.type

    @property
    def is_directory(self) -> bool:
        return True

    def copy(self) -> 'DirectoryNode':
        return DirectoryNode(id=self.id, name=self.name, children=list(self.children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'name': self.name,
            'children': list(self.children),
        }


class SearchResult(NamedTuple):
    """搜索结果：匹配的节点及其从根开始的完整路径"""
    node: INode
    path: str

    def to_dict(self) -> Dict[str, Any]:
        result = self.node.to_dict()
        result['path'] = self.path
        return result


def node_from_dict(data: Dict[str, Any]) -> INode:
    """
    从字典创建节点

    Args:
        data: 形如 {"id", "type", "name", "children"?} 的字典

    Returns:
        FileNode 或 DirectoryNode
    """
    if not isinstance(data, dict):
        raise ValidationError(
            message="节点数据必须是字典",
            field="node",
            value=data,
            reason="invalid_type"
        )

    for key in ('id', 'type', 'name'):
        if key not in data:
            raise ValidationError(
                message=f"缺少必需字段: {key}",
                field=key,
                reason="required_field_missing"
            )

    for key in ('id', 'name'):
        if not isinstance(data[key], str) or not data[key]:
            raise ValidationError(
                message=f"{key} 必须是非空字符串",
                field=key,
                value=data[key],
                reason="invalid_type"
            )

    try:
        node_type = NodeType(data['type'])
    except (ValueError, TypeError):
        raise ValidationError(
            message=f"未知的节点类型: {data['type']}",
            field="type",
            value=data['type'],
            reason="invalid_type"
        )

    if node_type is NodeType.DIRECTORY:
        children = data.get('children', [])
        if not isinstance(children, list) or \
                not all(isinstance(child_id, str) and child_id for child_id in children):
            raise ValidationError(
                message="children 必须是ID列表",
                field="children",
                value=children,
                reason="invalid_type"
            )
        return DirectoryNode(id=data['id'], name=data['name'], children=list(children))
    elif node_type is NodeType.FILE:
        if data.get('children'):
            raise ValidationError(
                message=f"文件节点不能有子节点: {data['id']}",
                field="children",
                value=data['children'],
                reason="file_with_children"
            )
        return FileNode(id=data['id'], name=data['name'])

    raise ValidationError(
        message=f"未处理的节点类型: {node_type}",
        field="type",
        value=node_type,
        reason="unhandled_type"
    )

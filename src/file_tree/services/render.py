"""
文本树渲染
"""
from typing import List, Optional

from ..core.node import NodeStore, NodeType
from ..exceptions import NodeNotFoundError


def render_tree(store: NodeStore, node_id: Optional[str] = None,
                depth: Optional[int] = None, show_ids: bool = False) -> List[str]:
    """
    把子树渲染为文本行

    Args:
        store: 节点存储
        node_id: 子树根ID，None 表示整棵树
        depth: 最大深度，None表示不限制
        show_ids: 是否在名称后显示节点ID

    Returns:
        文本行列表，子节点按 children 顺序排列，目录名以 "/" 结尾
    """
    # 在同一次快照上渲染，避免与并发变更交错
    table = store.snapshot()
    start = store.root_id if node_id is None else node_id
    if start not in table:
        raise NodeNotFoundError(node_id=start)

    lines = [_label(table[start], show_ids)]
    _render_children(table, start, "", lines, depth, 0, show_ids)
    return lines


def _label(node, show_ids: bool) -> str:
    label = node.name + ("/" if node.type is NodeType.DIRECTORY else "")
    if show_ids:
        label += f" [{node.id}]"
    return label


def _render_children(table, node_id, prefix, lines, depth, current_depth, show_ids):
    # 检查深度限制
    if depth is not None and current_depth >= depth:
        return

    node = table[node_id]
    if node.type is not NodeType.DIRECTORY:
        return

    total = len(node.children)
    for i, child_id in enumerate(node.children):
        is_last = (i == total - 1)

        # 当前行的连接符
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(table[child_id], show_ids)}")

        # 计算下一级的前缀
        extension = "    " if is_last else "│   "
        _render_children(table, child_id, prefix + extension, lines, depth, current_depth + 1, show_ids)

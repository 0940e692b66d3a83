"""
节点存储模块
内存中的树形节点表，负责维护全部树结构不变量
"""
import logging
import threading
from collections import deque
from typing import Optional, Dict, Any, List, Iterable, Mapping, Union

from ...interfaces import INode, INodeStore, IIdProvider
from ...config.settings import StoreSettings
from ...config.validator import NameValidator
from ...exceptions import (
    ConfigError, NodeNotFoundError, NodeTypeError, RootNodeError,
    TreeIntegrityError, TreeLimitError
)
from ..events import ChangeType, ChangeEvent, ChangeNotifier
from ..ids import create_id_provider
from .entity import NodeType, DirectoryNode, SearchResult, PATH_SEPARATOR
from .factory import NodeFactory
from .seed import SEED_NODES, SEED_ROOT_ID


logger = logging.getLogger(__name__)


class NodeStore(INodeStore):
    """
    节点存储 - 节点表的唯一所有者

    所有节点平铺保存在 id -> 节点 的表中，目录的 children 只记录子节点ID。
    另外维护 子节点ID -> 父目录ID 的索引，用于路径计算和删除时解除父子关系。
    所有读写操作都在同一把可重入锁内执行。
    """

    def __init__(
            self,
            settings: Optional[StoreSettings] = None,
            id_provider: Optional[IIdProvider] = None,
            seed: Optional[Union[Iterable, Mapping]] = None,
            notifier: Optional[ChangeNotifier] = None
    ):
        """
        初始化节点存储

        Args:
            settings: 存储配置，默认使用 StoreSettings()
            id_provider: ID提供者，默认按配置创建
            seed: 种子节点（节点对象或字典的序列，或 id->节点 映射），默认使用内置种子树
            notifier: 变更通知器
        """
        self.settings = settings or StoreSettings()
        self._root_id = self.settings.root_id
        self._validator = NameValidator(max_name_length=self.settings.max_name_length)
        self._factory = NodeFactory(id_provider or create_id_provider(
            strategy=self.settings.id_strategy,
            on_conflict=self.settings.on_id_conflict,
            separator=self.settings.id_separator
        ), validator=self._validator)
        self._notifier = notifier or ChangeNotifier()
        self._lock = threading.RLock()

        if seed is None:
            if self._root_id != SEED_ROOT_ID:
                raise ConfigError(
                    message=f"使用内置种子树时根节点ID必须为 {SEED_ROOT_ID}: {self._root_id}",
                    config_key="root_id"
                )
            seed = SEED_NODES

        self._seed: Dict[str, INode] = self._factory.build_table(seed)
        self._nodes, self._parents = self._install(self._seed)

        logger.debug("节点存储初始化完成: %d 个节点", len(self._nodes))

    # ========== 基本属性 ==========

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def subscribe(self, listener) -> None:
        """订阅变更通知"""
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener) -> bool:
        """取消订阅变更通知"""
        return self._notifier.unsubscribe(listener)

    # ========== 读取 ==========

    def read(self, node_id: Optional[str] = None) -> INode:
        """
        读取节点

        Args:
            node_id: 节点ID，None 表示根节点

        Returns:
            节点副本；修改返回值不会影响存储

        Raises:
            NodeNotFoundError: 节点不存在
        """
        node_id = self._root_id if node_id is None else node_id
        with self._lock:
            return self._require_node(node_id).copy()

    def get(self, node_id: str) -> Optional[INode]:
        """读取节点，不存在时返回 None"""
        with self._lock:
            node = self._nodes.get(node_id)
            return node.copy() if node is not None else None

    def exists(self, node_id: str) -> bool:
        """检查节点是否存在"""
        with self._lock:
            return node_id in self._nodes

    def search(self, query: str) -> List[SearchResult]:
        """
        按名称搜索全部节点（大小写不敏感的子串匹配）

        结果按节点表顺序排列，空查询返回空列表。

        Returns:
            SearchResult(node, path) 列表，path 为从根开始以 "/" 连接的名称链
        """
        query = self._validator.validate_query(query)
        if not query:
            return []

        needle = query.casefold()
        with self._lock:
            return [
                SearchResult(node.copy(), self._path_of(node_id))
                for node_id, node in self._nodes.items()
                if needle in node.name.casefold()
            ]

    def list_children(self, node_id: Optional[str] = None) -> List[INode]:
        """列出目录的直接子节点"""
        node_id = self._root_id if node_id is None else node_id
        with self._lock:
            directory = self._require_directory(node_id)
            return [self._nodes[child_id].copy() for child_id in directory.children]

    def get_parent_id(self, node_id: str) -> Optional[str]:
        """获取父目录ID，根节点返回 None"""
        with self._lock:
            self._require_node(node_id)
            return self._parents[node_id]

    def get_ancestors(self, node_id: str) -> List[str]:
        """获取所有祖先ID（从根到父目录）"""
        with self._lock:
            self._require_node(node_id)
            ancestors = []
            current = self._parents[node_id]
            while current is not None:
                ancestors.insert(0, current)
                current = self._parents[current]
            return ancestors

    def get_path(self, node_id: str) -> str:
        """获取从根到节点的完整路径，如 src/components/button.tsx"""
        with self._lock:
            self._require_node(node_id)
            return self._path_of(node_id)

    def traverse(self, node_id: Optional[str] = None, order: str = "preorder") -> List[INode]:
        """
        遍历子树

        Args:
            node_id: 子树根ID，None 表示整棵树
            order: 遍历顺序，可选 "preorder"（前序）, "postorder"（后序）

        Returns:
            节点副本列表
        """
        node_id = self._root_id if node_id is None else node_id
        with self._lock:
            self._require_node(node_id)

            if order == "preorder":
                ids = self._collect_preorder(node_id)
            elif order == "postorder":
                ids = self._collect_postorder(node_id)
            else:
                raise ValueError(f"不支持的遍历顺序: {order}")

            return [self._nodes[i].copy() for i in ids]

    def get_node_count(self) -> int:
        """获取节点数量"""
        with self._lock:
            return len(self._nodes)

    def get_tree_depth(self) -> int:
        """获取树的最大深度（根为0）"""
        with self._lock:
            max_depth = 0
            queue = deque([(self._root_id, 0)])
            while queue:
                current, depth = queue.popleft()
                max_depth = max(max_depth, depth)
                for child_id in self._children_of(self._nodes[current]):
                    queue.append((child_id, depth + 1))
            return max_depth

    def snapshot(self) -> Dict[str, INode]:
        """导出整张节点表的深拷贝"""
        with self._lock:
            return {node_id: node.copy() for node_id, node in self._nodes.items()}

    def to_dict(self) -> Dict[str, Any]:
        """序列化整张节点表"""
        with self._lock:
            return {
                'root_id': self._root_id,
                'node_count': len(self._nodes),
                'nodes': {node_id: node.to_dict() for node_id, node in self._nodes.items()},
            }

    # ========== 变更 ==========

    def create_file(self, parent_id: str, file_name: str,
                    file_extension: Optional[str] = None) -> INode:
        """
        在目录下创建文件

        Args:
            parent_id: 父目录ID
            file_name: 文件名（不含扩展名）
            file_extension: 扩展名，None 时使用配置的默认扩展名

        Returns:
            新文件节点的副本

        Raises:
            NodeNotFoundError: 父节点不存在
            NodeTypeError: 父节点是文件
            ValidationError: 名称或扩展名非法
            NodeIdConflictError: 无法分配不冲突的ID
        """
        self._validator.validate_node_id(parent_id, field="parent_id")
        self._validator.validate_name(file_name, field="file_name")
        if file_extension is None:
            file_extension = self.settings.default_file_extension
        extension = self._validator.validate_extension(file_extension)
        name = self._validator.validate_name(file_name + extension, field="file_name")

        with self._lock:
            return self._insert(parent_id, name, NodeType.FILE)

    def create_directory(self, parent_id: str, dir_name: str) -> INode:
        """
        在目录下创建子目录

        Raises:
            NodeNotFoundError: 父节点不存在
            NodeTypeError: 父节点是文件
            ValidationError: 名称非法
            NodeIdConflictError: 无法分配不冲突的ID
        """
        self._validator.validate_node_id(parent_id, field="parent_id")
        name = self._validator.validate_name(dir_name, field="dir_name")

        with self._lock:
            return self._insert(parent_id, name, NodeType.DIRECTORY)

    def rename(self, node_id: str, new_name: str) -> INode:
        """
        重命名节点

        只修改 name，节点ID和在树中的位置不变。

        Raises:
            NodeNotFoundError: 节点不存在（包括空串ID）
            ValidationError: ID不是字符串
            ValidationError: 名称非法
        """
        self._validator.validate_node_id(node_id)
        self._validator.validate_name(new_name, field="new_name")

        with self._lock:
            node = self._require_node(node_id)
            old_name = node.name
            node.name = new_name

            self._after_mutation([ChangeEvent(ChangeType.RENAMED, node_id, self._parents[node_id])])
            logger.info("重命名节点: %s (%s -> %s)", node_id, old_name, new_name)
            return node.copy()

    def delete(self, node_id: str) -> bool:
        """
        删除节点

        目录会先深度优先删除全部后代，再删除自身，并从父目录的 children 中移除。
        整个级联过程在锁内完成，并发读者看不到删除到一半的树。

        Returns:
            是否删除成功，节点不存在（包括空串ID）时返回 False

        Raises:
            ValidationError: ID不是字符串
            RootNodeError: 试图删除根节点
        """
        self._validator.validate_node_id(node_id)

        with self._lock:
            if node_id not in self._nodes:
                logger.debug("删除节点失败，节点不存在: %s", node_id)
                return False

            if node_id == self._root_id:
                raise RootNodeError(node_id=node_id, operation="删除")

            removed = self._collect_postorder(node_id)
            events = [
                ChangeEvent(ChangeType.DELETED, removed_id, self._parents[removed_id])
                for removed_id in removed
            ]

            parent_id = self._parents[node_id]
            self._nodes[parent_id].children.remove(node_id)

            for removed_id in removed:
                del self._nodes[removed_id]
                del self._parents[removed_id]

            self._after_mutation(events)
            logger.info("删除节点: %s (共 %d 个节点)", node_id, len(removed))
            return True

    def reset(self) -> None:
        """恢复到种子树"""
        with self._lock:
            self._nodes, self._parents = self._install(self._seed)
            self._notifier.publish(ChangeEvent(ChangeType.RESET))
            logger.info("节点存储已重置: %d 个节点", len(self._nodes))

    def load(self, table: Union[Iterable, Mapping]) -> None:
        """
        用新的节点表整体替换当前内容

        新表先完整校验，校验失败时当前内容保持不变。
        """
        new_table = self._factory.build_table(table)
        with self._lock:
            self._nodes, self._parents = self._install(new_table)
            self._notifier.publish(ChangeEvent(ChangeType.RESET))
            logger.info("节点表已加载: %d 个节点", len(self._nodes))

    # ========== 完整性校验 ==========

    def validate(self) -> bool:
        """
        校验全部树结构不变量

        Raises:
            TreeIntegrityError: 任一不变量被破坏
        """
        with self._lock:
            parents = self._build_parent_index(self._nodes)
            if parents != self._parents:
                raise TreeIntegrityError("父节点索引与节点表不一致")
            return True

    # ========== 内部方法 ==========

    def _require_node(self, node_id: str) -> INode:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id=node_id)
        return node

    def _require_directory(self, node_id: str) -> DirectoryNode:
        node = self._require_node(node_id)
        if node.type is NodeType.DIRECTORY:
            return node
        elif node.type is NodeType.FILE:
            raise NodeTypeError(
                node_id=node_id,
                expected=NodeType.DIRECTORY.value,
                actual=NodeType.FILE.value
            )
        raise TreeIntegrityError(f"未知的节点类型: {node.type}", node_id=node_id)

    def _children_of(self, node: INode) -> List[str]:
        if node.type is NodeType.DIRECTORY:
            return node.children
        elif node.type is NodeType.FILE:
            return []
        raise TreeIntegrityError(f"未知的节点类型: {node.type}", node_id=node.id)

    def _is_taken(self, node_id: str) -> bool:
        return node_id in self._nodes

    def _depth_of(self, node_id: str) -> int:
        depth = 0
        current = self._parents[node_id]
        while current is not None:
            depth += 1
            current = self._parents[current]
        return depth

    def _path_of(self, node_id: str) -> str:
        names = []
        current = node_id
        while current is not None:
            names.append(self._nodes[current].name)
            current = self._parents[current]
        return PATH_SEPARATOR.join(reversed(names))

    def _collect_preorder(self, node_id: str) -> List[str]:
        order = []
        stack = [node_id]
        while stack:
            current = stack.pop()
            order.append(current)
            stack.extend(reversed(self._children_of(self._nodes[current])))
        return order

    def _collect_postorder(self, node_id: str) -> List[str]:
        """深度优先收集子树ID，后代在前，子树根在最后"""
        order = []
        stack = [(node_id, False)]
        while stack:
            current, expanded = stack.pop()
            children = self._children_of(self._nodes[current])
            if expanded or not children:
                order.append(current)
                continue
            stack.append((current, True))
            for child_id in reversed(children):
                stack.append((child_id, False))
        return order

    def _insert(self, parent_id: str, name: str, node_type: NodeType) -> INode:
        """校验父目录与限制后插入新节点，调用方持有锁"""
        parent = self._require_directory(parent_id)

        depth = self._depth_of(parent_id) + 1
        if depth > self.settings.max_tree_depth:
            raise TreeLimitError(parent_id, "max_tree_depth", self.settings.max_tree_depth)

        if len(parent.children) >= self.settings.max_children_per_node:
            raise TreeLimitError(parent_id, "max_children_per_node", self.settings.max_children_per_node)

        if node_type is NodeType.FILE:
            node = self._factory.create_file(name, self._is_taken)
        elif node_type is NodeType.DIRECTORY:
            node = self._factory.create_directory(name, self._is_taken)
        else:
            raise TreeIntegrityError(f"未知的节点类型: {node_type}")

        # 分配到的ID必须仍然空闲，之后的步骤不会失败
        if node.id in self._nodes:
            raise TreeIntegrityError("ID提供者返回了已占用的ID", node_id=node.id)

        self._nodes[node.id] = node
        parent.children.append(node.id)
        self._parents[node.id] = parent_id

        self._after_mutation([ChangeEvent(ChangeType.CREATED, node.id, parent_id)])
        logger.info("创建%s: %s (id=%s, parent=%s)",
                    "目录" if node_type is NodeType.DIRECTORY else "文件",
                    name, node.id, parent_id)
        return node.copy()

    def _after_mutation(self, events: List[ChangeEvent]) -> None:
        if self.settings.enable_validation:
            self.validate()

        for event in events:
            self._notifier.publish(event)

    def _install(self, table: Dict[str, INode]):
        """复制节点表并建立父节点索引（校验失败时抛出异常）"""
        nodes = {node_id: node.copy() for node_id, node in table.items()}
        parents = self._build_parent_index(nodes)
        return nodes, parents

    def _build_parent_index(self, nodes: Dict[str, INode]) -> Dict[str, Optional[str]]:
        """
        根据 children 关系重建父节点索引，同时校验：
        ID与键一致、根节点存在且为目录、子节点ID都能解析、
        每个非根节点恰有一个父目录、所有节点都可从根到达（无环）
        """
        for key, node in nodes.items():
            if node.id != key:
                raise TreeIntegrityError(f"节点ID与表键不一致: {key}", node_id=node.id)

        root = nodes.get(self._root_id)
        if root is None:
            raise TreeIntegrityError("根节点不存在", node_id=self._root_id)
        if root.type is not NodeType.DIRECTORY:
            raise TreeIntegrityError("根节点必须是目录", node_id=self._root_id)

        parents: Dict[str, Optional[str]] = {self._root_id: None}
        for node in nodes.values():
            for child_id in self._children_of(node):
                if child_id not in nodes:
                    raise TreeIntegrityError(f"目录 {node.id} 引用了不存在的子节点", node_id=child_id)
                if child_id in parents:
                    raise TreeIntegrityError(f"节点被多次引用（{node.id}）", node_id=child_id)
                parents[child_id] = node.id

        for node_id in nodes:
            if node_id not in parents:
                raise TreeIntegrityError("节点没有父目录", node_id=node_id)

        reachable = 0
        queue = deque([self._root_id])
        visited = {self._root_id}
        while queue:
            current = queue.popleft()
            reachable += 1
            for child_id in self._children_of(nodes[current]):
                if child_id not in visited:
                    visited.add(child_id)
                    queue.append(child_id)

        if reachable != len(nodes):
            unreachable = sorted(set(nodes) - visited)
            raise TreeIntegrityError("存在环或从根不可达的节点", node_id=unreachable[0])

        return parents

    # ========== 特殊方法 ==========

    def __len__(self) -> int:
        return self.get_node_count()

    def __contains__(self, node_id: object) -> bool:
        with self._lock:
            return node_id in self._nodes

    def __str__(self) -> str:
        with self._lock:
            return f"NodeStore(root={self._root_id}, nodes={len(self._nodes)})"

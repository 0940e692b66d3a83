"""
节点读取缓存
存储之外的按节点ID读穿缓存（LRU + TTL），通过订阅变更通知保持新鲜
"""
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from ..interfaces import IChangeListener, INode, INodeStore
from ..core.events import ChangeType, ChangeEvent


logger = logging.getLogger(__name__)


class NodeReadCache(IChangeListener):
    """
    节点读穿缓存

    未命中时从存储读取并缓存副本。作为变更监听者：
    创建/删除时失效节点本身和父目录（父目录的 children 已变），
    重命名时失效节点本身，重置时清空全部。
    """

    def __init__(self, store: INodeStore, max_size: int = 1000, ttl: float = 0,
                 subscribe: bool = True):
        """
        初始化缓存

        Args:
            store: 节点存储
            max_size: 最大缓存条目数，0 表示不缓存
            ttl: 过期时间（秒），0 表示不过期
            subscribe: 是否自动订阅存储的变更通知
        """
        self._store = store
        self._max_size = max_size
        self._ttl = ttl
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, Tuple[INode, float]]" = OrderedDict()

        # 每次失效递增，用于丢弃失效前发起的回填
        self._generation = 0

        self._hits = 0
        self._misses = 0
        self._evictions = 0

        if subscribe:
            store.subscribe(self)

    def get(self, node_id: Optional[str] = None) -> INode:
        """
        读取节点（优先走缓存）

        Raises:
            NodeNotFoundError: 节点不存在（不缓存未命中结果）
        """
        node_id = node_id if node_id is not None else getattr(self._store, "root_id", "root")

        with self._lock:
            entry = self._entries.get(node_id)
            if entry is not None:
                node, stored_at = entry
                if not self._is_expired(stored_at):
                    self._entries.move_to_end(node_id)
                    self._hits += 1
                    return node.copy()
                del self._entries[node_id]
            self._misses += 1
            generation = self._generation

        node = self._store.read(node_id)

        with self._lock:
            if generation == self._generation:
                self._put(node_id, node)
            else:
                logger.debug("cache_fill_skipped node_id=%s", node_id)

        return node.copy()

    def invalidate(self, node_id: str) -> bool:
        """失效单个条目"""
        with self._lock:
            self._generation += 1
            return self._entries.pop(node_id, None) is not None

    def clear(self) -> None:
        """清空缓存"""
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def on_change(self, event: ChangeEvent) -> None:
        if event.change_type is ChangeType.RESET:
            self.clear()
            return

        with self._lock:
            self._generation += 1
            self._entries.pop(event.node_id, None)
            if event.change_type in (ChangeType.CREATED, ChangeType.DELETED) and event.parent_id:
                self._entries.pop(event.parent_id, None)

        logger.debug("cache_invalidate change=%s node_id=%s parent_id=%s",
                     event.change_type.value, event.node_id, event.parent_id)

    def stats(self) -> Dict[str, Any]:
        """缓存统计信息"""
        with self._lock:
            return {
                'size': len(self._entries),
                'max_size': self._max_size,
                'ttl': self._ttl,
                'hits': self._hits,
                'misses': self._misses,
                'evictions': self._evictions,
            }

    def __contains__(self, node_id: object) -> bool:
        with self._lock:
            entry = self._entries.get(node_id)
            return entry is not None and not self._is_expired(entry[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_expired(self, stored_at: float) -> bool:
        return bool(self._ttl) and time.monotonic() - stored_at > self._ttl

    def _put(self, node_id: str, node: INode) -> None:
        """写入条目并按LRU淘汰，调用方持有锁"""
        if self._max_size <= 0:
            return
        if node_id in self._entries:
            self._entries.move_to_end(node_id)
        self._entries[node_id] = (node.copy(), time.monotonic())
        while len(self._entries) > self._max_size:
            evicted_id, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug("cache_evict node_id=%s cache_size=%d", evicted_id, len(self._entries))

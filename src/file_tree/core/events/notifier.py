"""
变更通知模块
存储在重命名、删除等变更后向订阅者广播事件，供外部缓存失效使用
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from ...interfaces import IChangeListener


logger = logging.getLogger(__name__)


class ChangeType(Enum):
    """变更类型"""
    CREATED = "created"
    RENAMED = "renamed"
    DELETED = "deleted"
    RESET = "reset"


@dataclass(frozen=True)
class ChangeEvent:
    """
    一次变更事件

    Attributes:
        change_type: 变更类型
        node_id: 受影响的节点ID，RESET 时为 None
        parent_id: children 列表随之改变的父目录ID
    """
    change_type: ChangeType
    node_id: Optional[str] = None
    parent_id: Optional[str] = None


Listener = Union[IChangeListener, Callable[[ChangeEvent], None]]


class ChangeNotifier:
    """变更通知器，维护订阅者列表并同步投递事件"""

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """添加订阅者（重复订阅无效）"""
        if not isinstance(listener, IChangeListener) and not callable(listener):
            raise TypeError(f"订阅者必须实现 IChangeListener 或可调用: {listener!r}")

        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """移除订阅者"""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    def publish(self, event: ChangeEvent) -> None:
        """
        向所有订阅者投递事件

        单个订阅者失败只记录日志，变更本身已经生效，不会回滚，
        其余订阅者照常收到通知。
        """
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                if isinstance(listener, IChangeListener):
                    listener.on_change(event)
                else:
                    listener(event)
            except Exception:
                logger.exception(
                    "变更通知投递失败: listener=%r, event=%s", listener, event
                )

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

"""
变更监听接口
"""
from abc import ABC, abstractmethod


class IChangeListener(ABC):
    """变更监听者接口 - 接收节点存储的变更通知"""

    @abstractmethod
    def on_change(self, event) -> None:
        """
        处理一次变更

        通知在存储锁内同步投递，实现必须快速返回且不得阻塞。

        Args:
            event: ChangeEvent
        """
        pass

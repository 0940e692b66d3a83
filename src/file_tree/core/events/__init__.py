"""
事件模块 - 存储变更通知
"""

from .notifier import ChangeType, ChangeEvent, ChangeNotifier

__all__ = ['ChangeType', 'ChangeEvent', 'ChangeNotifier']

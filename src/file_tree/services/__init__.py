"""
服务模块 - 读缓存与文本渲染
"""

from .cache import NodeReadCache
from .render import render_tree

__all__ = ['NodeReadCache', 'render_tree']

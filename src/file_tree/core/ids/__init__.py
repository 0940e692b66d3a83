"""
ID模块 - 节点ID分配
"""

from .provider import NameBasedIdProvider, RandomIdProvider, create_id_provider

__all__ = ['NameBasedIdProvider', 'RandomIdProvider', 'create_id_provider']

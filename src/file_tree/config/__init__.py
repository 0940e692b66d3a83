"""
配置模块
"""

from .settings import StoreSettings
from .validator import NameValidator

__all__ = ['StoreSettings', 'NameValidator']

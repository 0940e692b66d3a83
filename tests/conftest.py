"""
pytest配置文件
用于设置测试环境和共享fixtures
"""
import sys
import os

import pytest

# 将src目录添加到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from file_tree.core.node import NodeStore
from file_tree.core.node.entity import node_from_dict
from file_tree.core.node.seed import SEED_NODES
from file_tree.system import FileTreeSystem


@pytest.fixture
def store():
    """带内置种子树的节点存储"""
    return NodeStore()


@pytest.fixture
def system():
    """关闭日志配置的系统实例"""
    return FileTreeSystem({"enable_logging": False})


@pytest.fixture
def seed_table():
    """种子树的期望节点表"""
    return {data["id"]: node_from_dict(data) for data in SEED_NODES}

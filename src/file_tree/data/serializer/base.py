"""
序列化基类定义
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class Serializer(ABC):
    """序列化器抽象基类"""

    @abstractmethod
    def serialize(self, obj: Any) -> bytes:
        """将Python对象序列化为字节流"""
        pass

    @abstractmethod
    def serialize_to_dict(self, obj: Any) -> Any:
        """将Python对象转换为可JSON序列化的结构"""
        pass


class Deserializer(ABC):
    """反序列化器抽象基类"""

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """从字节流反序列化为Python对象"""
        pass

    @abstractmethod
    def nodes_from_dict(self, payload: Dict) -> Dict:
        """从字典恢复节点表"""
        pass

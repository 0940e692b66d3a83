"""
JSON序列化器
使用标准json模块进行序列化
"""
import json
from datetime import datetime, date
from enum import Enum
from typing import Any, Dict

from ...config.validator import NameValidator
from ...exceptions import SerializationError, ValidationError
from ...interfaces import INode
from ...core.node.entity import node_from_dict
from .base import Serializer, Deserializer


class NodeEncoder(json.JSONEncoder):
    """处理节点、枚举和日期时间对象的JSON编码器"""

    def default(self, obj):
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif hasattr(obj, 'to_dict'):
            # 支持自定义序列化对象
            return obj.to_dict()

        return super().default(obj)


class JSONSerializer(Serializer, Deserializer):
    """JSON序列化器"""

    def __init__(self,
                 ensure_ascii: bool = False,
                 indent: int = 2,
                 sort_keys: bool = False):
        """
        初始化JSON序列化器

        Args:
            ensure_ascii: 是否确保ASCII编码
            indent: 缩进空格数
            sort_keys: 是否按键排序（会打乱节点表顺序，默认关闭）
        """
        self.ensure_ascii = ensure_ascii
        self.indent = indent
        self.sort_keys = sort_keys
        self._validator = NameValidator()

    def serialize(self, obj: Any) -> bytes:
        """序列化为字节流"""
        try:
            json_str = json.dumps(
                self.serialize_to_dict(obj),
                ensure_ascii=self.ensure_ascii,
                indent=self.indent,
                sort_keys=self.sort_keys,
                cls=NodeEncoder
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"JSON序列化失败: {e}", data_type=type(obj).__name__)
        return json_str.encode('utf-8')

    def serialize_to_dict(self, obj: Any) -> Any:
        """转换为可JSON序列化的结构"""
        # 如果对象有to_dict方法，使用它
        if hasattr(obj, 'to_dict') and callable(obj.to_dict):
            return obj.to_dict()

        if isinstance(obj, dict):
            return {key: self.serialize_to_dict(value) for key, value in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self.serialize_to_dict(item) for item in obj]

        return obj

    def deserialize(self, data: bytes) -> Any:
        """从字节流反序列化"""
        try:
            text = data.decode('utf-8') if isinstance(data, (bytes, bytearray)) else data
            return json.loads(text)
        except (UnicodeDecodeError, ValueError, TypeError) as e:
            raise SerializationError(f"JSON反序列化失败: {e}")

    def nodes_from_dict(self, payload: Dict) -> Dict[str, INode]:
        """
        从 NodeStore.to_dict() 的结构（或 id->节点字典 的映射）恢复节点表

        Returns:
            id -> 节点 映射，保持原有顺序
        """
        if not isinstance(payload, dict):
            raise SerializationError("节点表必须是JSON对象", data_type=type(payload).__name__)

        nodes = payload.get('nodes', payload)
        if not isinstance(nodes, dict):
            raise SerializationError("nodes 必须是JSON对象", data_type=type(nodes).__name__)

        table: Dict[str, INode] = {}
        for node_id, node_data in nodes.items():
            try:
                node = node_from_dict(node_data)
                self._validator.validate_name(node.name, field="name")
            except ValidationError as e:
                raise SerializationError(f"节点 {node_id} 无效: {e.message}", data_type="node")
            table[node_id] = node

        return table

    def load_nodes(self, data: bytes) -> Dict[str, INode]:
        """从字节流直接恢复节点表"""
        return self.nodes_from_dict(self.deserialize(data))

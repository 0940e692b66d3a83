"""
文件树节点存储异常体系
"""
from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """所有异常的基类"""

    # 适配层（HTTP/RPC）使用的状态码
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.context = context or {}
        self.timestamp = datetime.now()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典，便于序列化"""
        return {
            "code": self.code,
            "message": self.message,
            "status": self.status_code,
            "details": self.details,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ==================== 配置异常 ====================
class ConfigError(BaseError):
    """配置错误"""
    def __init__(self, message: str, config_key: Optional[str] = None, **details):
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, code="CONFIG_ERROR", details=details)


# ==================== 节点操作异常 ====================
class NodeError(BaseError):
    """节点操作错误基类"""
    pass


class NodeNotFoundError(NodeError):
    """节点不存在"""
    status_code = 404

    def __init__(self, node_id: str, **kwargs):
        super().__init__(
            message=f"节点不存在: id={node_id}",
            code="NODE_NOT_FOUND",
            details={"node_id": node_id},
            **kwargs
        )
        self.node_id = node_id


class InvalidArgumentError(NodeError):
    """参数无效（节点类型不符、删除根节点、名称非法等）"""
    status_code = 400

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(message, code=code, details=details, **kwargs)


class NodeTypeError(InvalidArgumentError):
    """节点类型不符合操作要求"""
    def __init__(self, node_id: str, expected: str, actual: str, **kwargs):
        super().__init__(
            message=f"节点类型错误: {node_id} 是 {actual}，需要 {expected}",
            code="INVALID_NODE_TYPE",
            details={"node_id": node_id, "expected": expected, "actual": actual},
            **kwargs
        )


class RootNodeError(InvalidArgumentError):
    """根节点不允许该操作"""
    def __init__(self, node_id: str, operation: str, **kwargs):
        super().__init__(
            message=f"根节点不允许{operation}: {node_id}",
            code="ROOT_NODE_PROTECTED",
            details={"node_id": node_id, "operation": operation},
            **kwargs
        )


class ValidationError(InvalidArgumentError):
    """数据验证错误"""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        details = {
            "field": field,
            "value": value,
            "reason": reason
        }
        super().__init__(message, code="VALIDATION_ERROR", details=details, **kwargs)


class TreeLimitError(InvalidArgumentError):
    """超出树结构限制（深度、子节点数）"""
    def __init__(self, node_id: str, limit: str, value: int, **kwargs):
        super().__init__(
            message=f"超出树结构限制[{limit}={value}]: {node_id}",
            code="TREE_LIMIT_EXCEEDED",
            details={"node_id": node_id, "limit": limit, "value": value},
            **kwargs
        )


class ConflictError(NodeError):
    """资源冲突"""
    status_code = 409

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(message, code=code, details=details, **kwargs)


class NodeIdConflictError(ConflictError):
    """生成的节点ID与已有节点冲突"""
    def __init__(self, node_id: str, reason: Optional[str] = None, **kwargs):
        message = f"节点ID冲突: {node_id}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            code="NODE_ID_CONFLICT",
            details={"node_id": node_id, "reason": reason},
            **kwargs
        )


# ==================== 树完整性异常 ====================
class TreeIntegrityError(BaseError):
    """树结构不变量被破坏"""
    def __init__(self, reason: str, node_id: Optional[str] = None, **kwargs):
        message = f"树结构完整性校验失败: {reason}"
        if node_id:
            message += f" (id={node_id})"
        super().__init__(
            message,
            code="TREE_INTEGRITY_ERROR",
            details={"node_id": node_id, "reason": reason},
            **kwargs
        )


# ==================== 序列化异常 ====================
class SerializationError(BaseError):
    """序列化异常"""
    status_code = 400

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"序列化错误: {message}",
            code="SERIALIZATION_ERROR",
            details={"data_type": data_type},
            **kwargs
        )

"""
系统配置设置
"""
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict, fields

from ..exceptions import ConfigError


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_ID_STRATEGIES = ["name", "uuid"]
VALID_CONFLICT_POLICIES = ["suffix", "reject"]


@dataclass
class StoreSettings:
    """
    节点存储配置类
    使用dataclass确保配置的类型安全，构造时即完成校验
    """

    # 系统基本配置
    system_name: str = "虚拟文件树存储"
    version: str = "1.0.0"

    # 日志配置
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_logging: bool = True

    # 树结构配置
    root_id: str = "root"
    default_file_extension: str = ".txt"
    max_name_length: int = 255
    max_tree_depth: int = 32
    max_children_per_node: int = 10000

    # ID分配配置
    id_strategy: str = "name"  # name, uuid
    on_id_conflict: str = "suffix"  # suffix, reject
    id_separator: str = "-"

    # 缓存配置
    enable_cache: bool = True
    cache_size: int = 1000
    cache_ttl: int = 3600  # 秒，0表示不过期

    # 每次变更后执行完整性校验
    enable_validation: bool = True

    def __post_init__(self):
        """初始化后处理，验证配置"""
        self._validate_settings()

    def _validate_settings(self):
        """验证配置值"""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigError(
                message=f"无效的日志级别: {self.log_level}",
                config_key="log_level",
                valid_values=VALID_LOG_LEVELS
            )

        if not isinstance(self.root_id, str) or not self.root_id:
            raise ConfigError(
                message="根节点ID不能为空",
                config_key="root_id"
            )

        ext = self.default_file_extension
        if not isinstance(ext, str) or (ext and not ext.startswith('.')) or '/' in ext:
            raise ConfigError(
                message=f"无效的默认扩展名: {ext!r}",
                config_key="default_file_extension"
            )

        if self.max_name_length <= 0:
            raise ConfigError(
                message=f"名称最大长度必须大于0: {self.max_name_length}",
                config_key="max_name_length"
            )

        if self.max_tree_depth <= 0:
            raise ConfigError(
                message=f"树深度必须大于0: {self.max_tree_depth}",
                config_key="max_tree_depth"
            )

        if self.max_children_per_node <= 0:
            raise ConfigError(
                message=f"子节点上限必须大于0: {self.max_children_per_node}",
                config_key="max_children_per_node"
            )

        if self.id_strategy not in VALID_ID_STRATEGIES:
            raise ConfigError(
                message=f"无效的ID分配策略: {self.id_strategy}",
                config_key="id_strategy",
                valid_values=VALID_ID_STRATEGIES
            )

        if self.on_id_conflict not in VALID_CONFLICT_POLICIES:
            raise ConfigError(
                message=f"无效的ID冲突策略: {self.on_id_conflict}",
                config_key="on_id_conflict",
                valid_values=VALID_CONFLICT_POLICIES
            )

        if not self.id_separator or '/' in self.id_separator:
            raise ConfigError(
                message=f"无效的ID分隔符: {self.id_separator!r}",
                config_key="id_separator"
            )

        if self.cache_size < 0 or self.cache_ttl < 0:
            raise ConfigError(
                message="缓存大小和过期时间不能为负数",
                config_key="cache_size" if self.cache_size < 0 else "cache_ttl"
            )

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StoreSettings':
        """从字典创建配置"""
        # 过滤无效的配置键
        valid_keys = {f.name for f in fields(cls)}
        filtered_config = {k: v for k, v in config_dict.items() if k in valid_keys}

        return cls(**filtered_config)

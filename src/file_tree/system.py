"""
虚拟文件树系统主入口
集成节点存储、读缓存、序列化和渲染，提供适配层（HTTP/RPC/CLI）使用的结果字典接口
"""

import logging
from typing import Dict, List, Optional, Any
from datetime import datetime

from .exceptions import BaseError
from .config.settings import StoreSettings
from .core.ids import create_id_provider
from .core.node import NodeStore
from .data.serializer import JSONSerializer
from .services.cache import NodeReadCache
from .services.render import render_tree


class FileTreeSystem:
    """
    虚拟文件树系统主类

    所有操作返回结果字典：
        {"success": bool, "status": int, "node": dict|None, "error": str|None, "code": str|None}
    存储抛出的 BaseError 按 status_code 映射（404/400/409），其余异常照常抛出。
    """

    def __init__(
            self,
            config: Optional[Dict[str, Any]] = None,
            store: Optional[NodeStore] = None
    ):
        """
        初始化系统

        Args:
            config: 系统配置字典
            store: 节点存储（默认按配置创建）
        """
        # 加载配置
        self.settings = StoreSettings.from_dict(config) if config else StoreSettings()

        # 初始化日志
        self._setup_logging()
        self.logger = logging.getLogger(__name__)

        # 节点存储
        self._store = store or NodeStore(
            settings=self.settings,
            id_provider=create_id_provider(
                strategy=self.settings.id_strategy,
                on_conflict=self.settings.on_id_conflict,
                separator=self.settings.id_separator
            )
        )

        # 读缓存（订阅存储的变更通知）
        self._cache: Optional[NodeReadCache] = None
        if self.settings.enable_cache:
            self._cache = NodeReadCache(
                self._store,
                max_size=self.settings.cache_size,
                ttl=self.settings.cache_ttl
            )

        self._serializer = JSONSerializer()
        self._start_time = datetime.now()

        self.logger.info(f"{self.settings.system_name} 初始化完成: {self._store}")

    def _setup_logging(self):
        """配置日志系统"""
        if not self.settings.enable_logging:
            return

        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if self.settings.log_file:
            handlers.append(logging.FileHandler(self.settings.log_file, encoding="utf-8"))

        logging.basicConfig(
            level=getattr(logging, self.settings.log_level),
            format=self.settings.log_format,
            handlers=handlers
        )

    @property
    def store(self) -> NodeStore:
        return self._store

    @property
    def cache(self) -> Optional[NodeReadCache]:
        return self._cache

    # ========== 节点操作 ==========

    def get_node(self, node_id: Optional[str] = None) -> Dict[str, Any]:
        """读取节点（启用缓存时走读穿缓存）"""
        try:
            node = self._cache.get(node_id) if self._cache else self._store.read(node_id)
        except BaseError as e:
            return self._error_result(e)
        return self._ok(node)

    def search(self, query: str) -> Dict[str, Any]:
        """按名称搜索"""
        try:
            results = self._store.search(query)
        except BaseError as e:
            return self._error_result(e)

        return {
            "success": True,
            "status": 200,
            "results": [result.to_dict() for result in results],
            "error": None,
            "code": None,
        }

    def create_file(
            self,
            parent_id: str,
            file_name: str,
            file_extension: Optional[str] = None
    ) -> Dict[str, Any]:
        """创建文件，未指定扩展名时使用配置的默认扩展名"""
        try:
            node = self._store.create_file(parent_id, file_name, file_extension)
        except BaseError as e:
            self.logger.warning(f"创建文件失败: {parent_id}/{file_name}, 错误: {e}")
            return self._error_result(e)
        return self._ok(node, status=201)

    def create_directory(self, parent_id: str, dir_name: str) -> Dict[str, Any]:
        """创建目录"""
        try:
            node = self._store.create_directory(parent_id, dir_name)
        except BaseError as e:
            self.logger.warning(f"创建目录失败: {parent_id}/{dir_name}, 错误: {e}")
            return self._error_result(e)
        return self._ok(node, status=201)

    def rename(self, node_id: str, new_name: str) -> Dict[str, Any]:
        """重命名节点"""
        try:
            node = self._store.rename(node_id, new_name)
        except BaseError as e:
            self.logger.warning(f"重命名失败: {node_id}, 错误: {e}")
            return self._error_result(e)
        return self._ok(node)

    def delete(self, node_id: str) -> Dict[str, Any]:
        """删除节点，节点不存在时 success 为 False"""
        try:
            deleted = self._store.delete(node_id)
        except BaseError as e:
            self.logger.warning(f"删除节点失败: {node_id}, 错误: {e}")
            return self._error_result(e)

        if not deleted:
            return {
                "success": False,
                "status": 404,
                "node": None,
                "error": f"节点不存在: id={node_id}",
                "code": "NODE_NOT_FOUND",
            }

        return {"success": True, "status": 200, "node": None, "error": None, "code": None}

    # ========== 诊断 ==========

    def get_all_nodes(self) -> Dict[str, Dict[str, Any]]:
        """获取全部节点（调试/测试用）"""
        return {node_id: node.to_dict() for node_id, node in self._store.snapshot().items()}

    def reset(self) -> None:
        """重置到种子树（测试用）"""
        self._store.reset()

    def render_tree(self, node_id: Optional[str] = None, depth: Optional[int] = None,
                    show_ids: bool = False) -> str:
        """渲染文本树"""
        return "\n".join(render_tree(self._store, node_id, depth=depth, show_ids=show_ids))

    def export_json(self) -> bytes:
        """导出节点表为JSON"""
        return self._serializer.serialize(self._store)

    def import_json(self, data: bytes) -> Dict[str, Any]:
        """从JSON导入节点表，整体替换当前内容"""
        try:
            self._store.load(self._serializer.load_nodes(data))
        except BaseError as e:
            self.logger.error(f"导入节点表失败: {e}")
            return self._error_result(e)

        self.logger.info(f"导入节点表成功: {self._store.get_node_count()} 个节点")
        return {"success": True, "status": 200, "node": None, "error": None, "code": None}

    def get_system_info(self) -> Dict[str, Any]:
        """获取系统信息"""
        return {
            "system_name": self.settings.system_name,
            "version": self.settings.version,
            "uptime": str(datetime.now() - self._start_time),
            "node_count": self._store.get_node_count(),
            "tree_depth": self._store.get_tree_depth(),
            "cache": self._cache.stats() if self._cache else None,
        }

    # ========== 结果构造 ==========

    @staticmethod
    def _ok(node, status: int = 200) -> Dict[str, Any]:
        return {
            "success": True,
            "status": status,
            "node": node.to_dict(),
            "error": None,
            "code": None,
        }

    @staticmethod
    def _error_result(error: BaseError) -> Dict[str, Any]:
        return {
            "success": False,
            "status": error.status_code,
            "node": None,
            "error": error.message,
            "code": error.code,
        }

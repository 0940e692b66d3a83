"""
节点存储接口
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class INodeStore(ABC):
    """节点存储接口 - 适配层（HTTP/RPC/CLI）依赖的最小操作集"""

    @abstractmethod
    def read(self, node_id: Optional[str] = None):
        """读取节点副本（None 表示根节点），不存在时抛出 NodeNotFoundError"""
        pass

    @abstractmethod
    def search(self, query: str) -> List:
        """按名称大小写不敏感子串匹配，返回 SearchResult 列表"""
        pass

    @abstractmethod
    def create_file(self, parent_id: str, file_name: str, file_extension: Optional[str] = None):
        """在目录下创建文件"""
        pass

    @abstractmethod
    def create_directory(self, parent_id: str, dir_name: str):
        """在目录下创建子目录"""
        pass

    @abstractmethod
    def rename(self, node_id: str, new_name: str):
        """重命名节点，ID与位置不变"""
        pass

    @abstractmethod
    def delete(self, node_id: str) -> bool:
        """删除节点（目录级联删除），不存在返回False"""
        pass

    @abstractmethod
    def snapshot(self) -> Dict:
        """导出整张节点表的深拷贝"""
        pass

    @abstractmethod
    def reset(self) -> None:
        """恢复到种子树"""
        pass

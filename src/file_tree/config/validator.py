"""
名称与参数验证器
"""
from typing import Any

from ..exceptions import ValidationError


RESERVED_NAMES = {".", ".."}


class NameValidator:
    """节点名称、扩展名、查询串的验证器"""

    def __init__(self, max_name_length: int = 255):
        self._max_name_length = max_name_length

    def validate_name(self, name: Any, field: str = "name") -> str:
        """
        验证节点名称

        名称必须是非空字符串，不能是 "." 或 ".."，不能包含 "/" 和 NUL，
        长度不超过 max_name_length。

        Returns:
            原样返回的名称
        """
        if not isinstance(name, str):
            raise ValidationError(
                message="名称必须是字符串",
                field=field,
                value=name,
                reason="invalid_type"
            )

        if not name.strip():
            raise ValidationError(
                message="名称不能为空",
                field=field,
                value=name,
                reason="empty"
            )

        if name in RESERVED_NAMES:
            raise ValidationError(
                message=f"名称为保留字: {name}",
                field=field,
                value=name,
                reason="reserved"
            )

        if '/' in name or '\x00' in name:
            raise ValidationError(
                message=f"名称包含非法字符: {name!r}",
                field=field,
                value=name,
                reason="invalid_character"
            )

        if len(name) > self._max_name_length:
            raise ValidationError(
                message=f"名称长度超过限制: {len(name)} > {self._max_name_length}",
                field=field,
                value=name,
                reason="too_long"
            )

        return name

    def validate_extension(self, extension: Any) -> str:
        """
        验证并规范化扩展名

        "md" 规范化为 ".md"，空串表示无扩展名。
        """
        if extension is None:
            return ""

        if not isinstance(extension, str):
            raise ValidationError(
                message="扩展名必须是字符串",
                field="file_extension",
                value=extension,
                reason="invalid_type"
            )

        if not extension:
            return ""

        if not extension.startswith('.'):
            extension = '.' + extension

        if extension == '.' or '/' in extension or '\x00' in extension \
                or any(ch.isspace() for ch in extension):
            raise ValidationError(
                message=f"无效的扩展名: {extension!r}",
                field="file_extension",
                value=extension,
                reason="invalid_format"
            )

        return extension

    def validate_query(self, query: Any) -> str:
        """验证搜索查询串"""
        if not isinstance(query, str):
            raise ValidationError(
                message="查询必须是字符串",
                field="query",
                value=query,
                reason="invalid_type"
            )
        return query

    def validate_node_id(self, node_id: Any, field: str = "node_id") -> str:
        """
        验证节点ID类型

        只检查类型；空串是合法但不存在的ID，由存储按"节点不存在"处理。
        """
        if not isinstance(node_id, str):
            raise ValidationError(
                message="节点ID必须是字符串",
                field=field,
                value=node_id,
                reason="invalid_id"
            )
        return node_id

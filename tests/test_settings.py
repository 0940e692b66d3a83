"""
测试配置与名称验证器
"""
import pytest

from file_tree.config import StoreSettings, NameValidator
from file_tree.exceptions import ConfigError, ValidationError


class TestStoreSettings:
    """测试存储配置"""

    def test_defaults(self):
        settings = StoreSettings()
        assert settings.root_id == "root"
        assert settings.default_file_extension == ".txt"
        assert settings.id_strategy == "name"
        assert settings.on_id_conflict == "suffix"
        assert settings.enable_validation is True

    def test_log_level_is_normalized(self):
        assert StoreSettings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("overrides, key", [
        ({"log_level": "LOUD"}, "log_level"),
        ({"root_id": ""}, "root_id"),
        ({"default_file_extension": "txt"}, "default_file_extension"),
        ({"default_file_extension": "./x"}, "default_file_extension"),
        ({"max_name_length": 0}, "max_name_length"),
        ({"max_tree_depth": -1}, "max_tree_depth"),
        ({"max_children_per_node": 0}, "max_children_per_node"),
        ({"id_strategy": "sequence"}, "id_strategy"),
        ({"on_id_conflict": "overwrite"}, "on_id_conflict"),
        ({"id_separator": ""}, "id_separator"),
        ({"id_separator": "/"}, "id_separator"),
        ({"cache_size": -1}, "cache_size"),
        ({"cache_ttl": -5}, "cache_ttl"),
    ])
    def test_invalid_values(self, overrides, key):
        with pytest.raises(ConfigError) as exc_info:
            StoreSettings(**overrides)
        assert exc_info.value.details["config_key"] == key
        assert exc_info.value.code == "CONFIG_ERROR"

    def test_empty_default_extension_allowed(self):
        assert StoreSettings(default_file_extension="").default_file_extension == ""

    def test_from_dict_ignores_unknown_keys(self):
        settings = StoreSettings.from_dict({"cache_size": 10, "unknown": True})
        assert settings.cache_size == 10
        assert not hasattr(settings, "unknown")

    def test_to_dict_round_trip(self):
        settings = StoreSettings(id_strategy="uuid", cache_ttl=0)
        assert StoreSettings.from_dict(settings.to_dict()) == settings


class TestNameValidator:
    """测试名称验证器"""

    @pytest.fixture
    def validator(self):
        return NameValidator(max_name_length=10)

    def test_valid_name(self, validator):
        assert validator.validate_name("index.tsx") == "index.tsx"
        assert validator.validate_name(".env") == ".env"

    @pytest.mark.parametrize("name, reason", [
        (None, "invalid_type"),
        (5, "invalid_type"),
        ("", "empty"),
        ("  ", "empty"),
        (".", "reserved"),
        ("..", "reserved"),
        ("a/b", "invalid_character"),
        ("a\x00b", "invalid_character"),
        ("x" * 11, "too_long"),
    ])
    def test_invalid_name(self, validator, name, reason):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_name(name, field="file_name")
        assert exc_info.value.details["reason"] == reason
        assert exc_info.value.details["field"] == "file_name"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("raw, expected", [
        (None, ""),
        ("", ""),
        ("md", ".md"),
        (".md", ".md"),
        (".tar.gz", ".tar.gz"),
    ])
    def test_extension_normalization(self, validator, raw, expected):
        assert validator.validate_extension(raw) == expected

    @pytest.mark.parametrize("raw", [".", "a/b", ".m d", 3])
    def test_invalid_extension(self, validator, raw):
        with pytest.raises(ValidationError):
            validator.validate_extension(raw)

    def test_query_and_node_id(self, validator):
        assert validator.validate_query("") == ""
        with pytest.raises(ValidationError):
            validator.validate_query(b"ton")

        assert validator.validate_node_id("root") == "root"
        assert validator.validate_node_id("") == ""
        for bad in (None, 1, ["root"]):
            with pytest.raises(ValidationError) as exc_info:
                validator.validate_node_id(bad)
            assert exc_info.value.details["reason"] == "invalid_id"

"""
测试节点存储的读取、搜索与变更操作
"""
import pytest

from file_tree.core.node import NodeStore, NodeType, FileNode, DirectoryNode
from file_tree.config.settings import StoreSettings
from file_tree.exceptions import (
    NodeNotFoundError, InvalidArgumentError, NodeTypeError, RootNodeError,
    ValidationError, ConflictError, NodeIdConflictError, TreeLimitError,
    TreeIntegrityError
)
from file_tree.interfaces import IIdProvider


def _assert_tree_invariants(store):
    """无悬空子节点、每个非根节点恰有一个父目录"""
    table = store.snapshot()
    parent_count = {node_id: 0 for node_id in table}
    for node in table.values():
        if node.type is NodeType.DIRECTORY:
            for child_id in node.children:
                assert child_id in table, f"悬空子节点: {child_id}"
                parent_count[child_id] += 1

    for node_id, count in parent_count.items():
        expected = 0 if node_id == store.root_id else 1
        assert count == expected, f"{node_id} 被 {count} 个目录引用"


class TestRead:
    """测试读取"""

    def test_read_root_by_default(self, store):
        root = store.read()
        assert root.id == "root"
        assert root.name == "src"
        assert root.type is NodeType.DIRECTORY
        assert root.children == ["index.tsx", "components", "types"]

    def test_read_file(self, store):
        node = store.read("button.tsx")
        assert isinstance(node, FileNode)
        assert node.name == "button.tsx"

    def test_read_missing_raises(self, store):
        with pytest.raises(NodeNotFoundError) as exc_info:
            store.read("missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.details["node_id"] == "missing"

    def test_read_returns_copy(self, store):
        root = store.read("root")
        root.children.clear()
        root.name = "hacked"

        assert store.read("root").children == ["index.tsx", "components", "types"]
        assert store.read("root").name == "src"

    def test_get_and_exists(self, store):
        assert store.get("missing") is None
        assert store.get("types").name == "types"
        assert store.exists("types")
        assert "types" in store
        assert not store.exists("missing")

    def test_list_children(self, store):
        children = store.list_children("types")
        assert [c.id for c in children] == ["file-types.tsx", "other-types.tsx"]

        with pytest.raises(NodeTypeError):
            store.list_children("index.tsx")

    def test_paths_and_ancestors(self, store):
        assert store.get_path("button.tsx") == "src/components/button.tsx"
        assert store.get_path("root") == "src"
        assert store.get_ancestors("other-types.tsx") == ["root", "types"]
        assert store.get_ancestors("root") == []
        assert store.get_parent_id("button.tsx") == "components"
        assert store.get_parent_id("root") is None

    def test_traverse(self, store):
        preorder = [n.id for n in store.traverse()]
        assert preorder == [
            "root", "index.tsx", "components", "button.tsx",
            "types", "file-types.tsx", "other-types.tsx"
        ]

        postorder = [n.id for n in store.traverse("types", order="postorder")]
        assert postorder == ["file-types.tsx", "other-types.tsx", "types"]

        with pytest.raises(ValueError):
            store.traverse(order="inorder")

    def test_counts(self, store):
        assert store.get_node_count() == 7
        assert len(store) == 7
        assert store.get_tree_depth() == 2


class TestSearch:
    """测试搜索"""

    def test_search_single_match_with_full_path(self, store):
        results = store.search("ton")
        assert len(results) == 1

        node, path = results[0]
        assert node.id == "button.tsx"
        assert node.name == "button.tsx"
        assert path == "src/components/button.tsx"

    def test_search_is_case_insensitive(self, store):
        results = store.search("TSX")
        assert {r.node.id for r in results} == {
            "index.tsx", "button.tsx", "file-types.tsx", "other-types.tsx"
        }

    def test_search_covers_all_nodes(self, store):
        results = store.search("types")
        paths = {r.path for r in results}
        assert paths == {
            "src/types",
            "src/types/file-types.tsx",
            "src/types/other-types.tsx",
        }

    def test_search_matches_root(self, store):
        results = store.search("SR")
        assert [(r.node.id, r.path) for r in results] == [("root", "src")]

    def test_search_order_is_deterministic(self, store):
        first = [r.node.id for r in store.search("s")]
        second = [r.node.id for r in store.search("s")]
        assert first == second

    def test_search_empty_and_no_match(self, store):
        assert store.search("") == []
        assert store.search("zzz") == []

    def test_search_rejects_non_string(self, store):
        with pytest.raises(ValidationError):
            store.search(None)

    def test_search_result_to_dict(self, store):
        result = store.search("button")[0].to_dict()
        assert result == {
            "id": "button.tsx",
            "type": "file",
            "name": "button.tsx",
            "path": "src/components/button.tsx",
        }


class TestCreate:
    """测试创建文件与目录"""

    def test_create_file_round_trip(self, store):
        node = store.create_file("root", "new", ".md")

        assert isinstance(node, FileNode)
        assert node.name == "new.md"
        assert store.read(node.id) == node
        assert store.read("root").children.count(node.id) == 1
        assert store.read("root").children[-1] == node.id
        _assert_tree_invariants(store)

    def test_create_file_default_extension(self, store):
        node = store.create_file("types", "notes")
        assert node.name == "notes.txt"
        assert store.get_path(node.id) == "src/types/notes.txt"

    def test_create_file_extension_normalization(self, store):
        assert store.create_file("root", "readme", "md").name == "readme.md"
        assert store.create_file("root", "Makefile", "").name == "Makefile"

        custom = NodeStore(settings=StoreSettings(default_file_extension=".py"))
        assert custom.create_file("root", "main", None).name == "main.py"

    def test_create_file_id_collision_gets_suffix(self, store):
        node = store.create_file("root", "index", ".tsx")

        assert node.id != "index.tsx"
        assert node.id == "index-1.tsx"
        assert node.name == "index.tsx"
        assert store.read("index.tsx").name == "index.tsx"

        again = store.create_file("components", "index", ".tsx")
        assert again.id == "index-2.tsx"
        _assert_tree_invariants(store)

    def test_create_file_under_file_fails(self, store):
        before = store.snapshot()

        with pytest.raises(InvalidArgumentError) as exc_info:
            store.create_file("index.tsx", "x")

        assert isinstance(exc_info.value, NodeTypeError)
        assert exc_info.value.status_code == 400
        assert store.snapshot() == before

    def test_create_file_missing_parent_fails(self, store):
        before = store.snapshot()

        with pytest.raises(NodeNotFoundError):
            store.create_file("missing", "x")

        assert store.snapshot() == before

    @pytest.mark.parametrize("bad_name", ["", "   ", "a/b", "..", None])
    def test_create_file_invalid_name(self, store, bad_name):
        before = store.snapshot()
        with pytest.raises(ValidationError):
            store.create_file("root", bad_name)
        assert store.snapshot() == before

    def test_create_directory(self, store):
        node = store.create_directory("components", "icons")

        assert isinstance(node, DirectoryNode)
        assert node.id == "icons"
        assert node.children == []
        assert store.read("components").children == ["button.tsx", "icons"]
        assert store.get_path("icons") == "src/components/icons"

        nested = store.create_file("icons", "star", ".svg")
        assert store.get_path(nested.id) == "src/components/icons/star.svg"
        _assert_tree_invariants(store)

    def test_create_directory_collision(self, store):
        node = store.create_directory("root", "components")
        assert node.id == "components-1"
        assert node.name == "components"
        assert store.read("components").children == ["button.tsx"]

    def test_create_directory_under_file_fails(self, store):
        with pytest.raises(NodeTypeError):
            store.create_directory("button.tsx", "nested")

    def test_reject_conflict_policy(self):
        store = NodeStore(settings=StoreSettings(on_id_conflict="reject"))
        before = store.snapshot()

        with pytest.raises(ConflictError) as exc_info:
            store.create_file("root", "index", ".tsx")

        assert isinstance(exc_info.value, NodeIdConflictError)
        assert exc_info.value.status_code == 409
        assert store.snapshot() == before

    def test_uuid_id_strategy(self):
        store = NodeStore(settings=StoreSettings(id_strategy="uuid"))
        node = store.create_file("root", "new", ".md")

        assert node.name == "new.md"
        assert len(node.id) == 8
        assert node.id in store.read("root").children

    def test_direct_create_uses_configured_extension(self):
        store = NodeStore(settings=StoreSettings(default_file_extension=".py"))
        assert store.create_file("root", "main").name == "main.py"

    def test_invalid_allocated_id_rejected(self):
        class SlashIdProvider(IIdProvider):
            def allocate(self, name, is_taken):
                return f"bad/{name}"

            def validate_id(self, node_id):
                return "/" not in node_id

        store = NodeStore(id_provider=SlashIdProvider())
        before = store.snapshot()

        with pytest.raises(TreeIntegrityError):
            store.create_file("root", "new", ".md")

        assert store.snapshot() == before

    def test_empty_parent_id_is_not_found(self, store):
        with pytest.raises(NodeNotFoundError):
            store.create_file("", "x")

    def test_tree_depth_limit(self):
        store = NodeStore(settings=StoreSettings(max_tree_depth=1))
        store.create_file("root", "ok")

        with pytest.raises(TreeLimitError):
            store.create_file("components", "too-deep")

    def test_children_limit(self):
        store = NodeStore(settings=StoreSettings(max_children_per_node=3))
        before = store.snapshot()

        with pytest.raises(TreeLimitError) as exc_info:
            store.create_directory("root", "extra")

        assert exc_info.value.details["limit"] == "max_children_per_node"
        assert store.snapshot() == before


class TestRename:
    """测试重命名"""

    def test_rename_preserves_identity(self, store):
        renamed = store.rename("index.tsx", "main.tsx")

        assert renamed.id == "index.tsx"
        assert renamed.name == "main.tsx"
        assert store.read("index.tsx").name == "main.tsx"
        assert "index.tsx" in store.read("root").children
        assert store.get_path("index.tsx") == "src/main.tsx"

    def test_rename_directory_updates_descendant_paths(self, store):
        store.rename("components", "widgets")
        assert store.search("button")[0].path == "src/widgets/button.tsx"

    def test_rename_root(self, store):
        store.rename("root", "app")
        assert store.get_path("file-types.tsx") == "app/types/file-types.tsx"

    def test_rename_missing_raises(self, store):
        with pytest.raises(NodeNotFoundError):
            store.rename("missing", "x")

    def test_rename_empty_id_is_not_found(self, store):
        with pytest.raises(NodeNotFoundError):
            store.rename("", "x")

    def test_rename_invalid_name(self, store):
        with pytest.raises(ValidationError):
            store.rename("index.tsx", "a/b")
        assert store.read("index.tsx").name == "index.tsx"

    def test_search_finds_new_name(self, store):
        store.rename("other-types.tsx", "shared.tsx")
        assert store.search("other") == []
        assert store.search("shared")[0].path == "src/types/shared.tsx"


class TestDelete:
    """测试删除"""

    def test_delete_cascades_fully(self, store):
        assert store.delete("components") is True

        with pytest.raises(NodeNotFoundError):
            store.read("components")
        with pytest.raises(NodeNotFoundError):
            store.read("button.tsx")

        assert "components" not in store.read("root").children
        assert store.read("root").children == ["index.tsx", "types"]
        assert store.get_node_count() == 5
        _assert_tree_invariants(store)

    def test_delete_file_unlinks_from_parent(self, store):
        assert store.delete("file-types.tsx") is True
        assert store.read("types").children == ["other-types.tsx"]
        _assert_tree_invariants(store)

    def test_delete_missing_returns_false(self, store):
        before = store.snapshot()
        assert store.delete("missing") is False
        assert store.snapshot() == before

    def test_delete_empty_id_returns_false(self, store):
        assert store.delete("") is False
        assert store.get_node_count() == 7

        with pytest.raises(ValidationError):
            store.delete(None)

    def test_delete_twice(self, store):
        assert store.delete("types") is True
        assert store.delete("types") is False
        assert store.delete("file-types.tsx") is False

    def test_delete_root_rejected(self, store):
        with pytest.raises(InvalidArgumentError) as exc_info:
            store.delete("root")

        assert isinstance(exc_info.value, RootNodeError)
        assert exc_info.value.code == "ROOT_NODE_PROTECTED"
        assert store.get_node_count() == 7

    def test_delete_deep_subtree(self, store):
        store.create_directory("components", "icons")
        store.create_directory("icons", "outline")
        store.create_file("outline", "star", ".svg")
        store.create_file("icons", "logo", ".svg")

        assert store.delete("components") is True
        assert store.get_node_count() == 5
        for node_id in ("icons", "outline", "star.svg", "logo.svg", "button.tsx"):
            assert not store.exists(node_id)
        _assert_tree_invariants(store)

    def test_deleted_id_can_be_reused(self, store):
        store.delete("index.tsx")
        node = store.create_file("root", "index", ".tsx")
        assert node.id == "index.tsx"


class TestSnapshotAndReset:
    """测试快照与重置"""

    def test_snapshot_is_deep_copy(self, store):
        snap = store.snapshot()
        snap["root"].children.append("ghost")
        snap["index.tsx"].name = "ghost"
        del snap["types"]

        assert store.read("root").children == ["index.tsx", "components", "types"]
        assert store.read("index.tsx").name == "index.tsx"
        assert store.exists("types")

    def test_reset_restores_seed(self, store, seed_table):
        store.create_directory("root", "lib")
        store.create_file("lib", "util", ".ts")
        store.rename("index.tsx", "main.tsx")
        store.delete("components")

        store.reset()

        assert store.snapshot() == seed_table
        assert list(store.snapshot()) == list(seed_table)

    def test_reset_is_idempotent(self, store, seed_table):
        store.reset()
        store.reset()
        assert store.snapshot() == seed_table

    def test_seed_is_not_shared_between_stores(self, seed_table):
        first = NodeStore()
        second = NodeStore()
        first.delete("types")

        assert second.snapshot() == seed_table
        first.reset()
        assert first.snapshot() == seed_table

    def test_to_dict(self, store):
        data = store.to_dict()
        assert data["root_id"] == "root"
        assert data["node_count"] == 7
        assert data["nodes"]["components"] == {
            "id": "components",
            "type": "directory",
            "name": "components",
            "children": ["button.tsx"],
        }

"""
种子树 - 存储的默认初始数据，也是测试的标准夹具

    src/
    ├── index.tsx
    ├── components/
    │   └── button.tsx
    └── types/
        ├── file-types.tsx
        └── other-types.tsx
"""

SEED_ROOT_ID = "root"

SEED_NODES = (
    {
        "id": "root",
        "type": "directory",
        "name": "src",
        "children": ["index.tsx", "components", "types"],
    },
    {
        "id": "index.tsx",
        "type": "file",
        "name": "index.tsx",
    },
    {
        "id": "components",
        "type": "directory",
        "name": "components",
        "children": ["button.tsx"],
    },
    {
        "id": "button.tsx",
        "type": "file",
        "name": "button.tsx",
    },
    {
        "id": "types",
        "type": "directory",
        "name": "types",
        "children": ["file-types.tsx", "other-types.tsx"],
    },
    {
        "id": "file-types.tsx",
        "type": "file",
        "name": "file-types.tsx",
    },
    {
        "id": "other-types.tsx",
        "type": "file",
        "name": "other-types.tsx",
    },
)

"""
命令行入口 - 在进程内的种子树上浏览、搜索节点
"""
import argparse
import sys
from typing import List, Optional

from .data.serializer import JSONSerializer
from .exceptions import BaseError
from .system import FileTreeSystem


def build_parser() -> argparse.ArgumentParser:
    # 创建命令行参数解析器
    parser = argparse.ArgumentParser(prog="file-tree", description='虚拟文件树节点存储')
    parser.add_argument('--log-level', default='WARNING', help='日志级别（默认WARNING）')
    subparsers = parser.add_subparsers(dest='command', required=True)

    tree_parser = subparsers.add_parser('tree', help='显示树结构')
    tree_parser.add_argument('--node', default=None, help='子树根ID（默认为根节点）')
    tree_parser.add_argument('-d', '--depth', type=int, help='限制显示深度')
    tree_parser.add_argument('--ids', action='store_true', help='显示节点ID')

    search_parser = subparsers.add_parser('search', help='按名称搜索节点')
    search_parser.add_argument('query', help='搜索关键字（大小写不敏感）')
    search_parser.add_argument('--json', action='store_true', help='以JSON输出')

    show_parser = subparsers.add_parser('show', help='以JSON显示单个节点')
    show_parser.add_argument('node_id', nargs='?', default=None, help='节点ID（默认为根节点）')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    system = FileTreeSystem({"log_level": args.log_level, "enable_cache": False})
    serializer = JSONSerializer()

    if args.command == 'tree':
        try:
            print(system.render_tree(args.node, depth=args.depth, show_ids=args.ids))
        except BaseError as e:
            print(f"错误：{e.message}", file=sys.stderr)
            return 1
        return 0

    if args.command == 'search':
        result = system.search(args.query)
        if not result["success"]:
            print(f"错误：{result['error']}", file=sys.stderr)
            return 1
        if args.json:
            print(serializer.serialize(result["results"]).decode('utf-8'))
        else:
            for item in result["results"]:
                print(f"{item['path']}  [{item['type']}, id={item['id']}]")
        return 0

    # show
    result = system.get_node(args.node_id)
    if not result["success"]:
        print(f"错误：{result['error']}", file=sys.stderr)
        return 1
    print(serializer.serialize(result["node"]).decode('utf-8'))
    return 0


if __name__ == "__main__":
    sys.exit(main())

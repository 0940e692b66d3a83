"""
虚拟文件树存储基本使用示例
"""
import sys
import os

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from file_tree import FileTreeSystem


def main():
    """主函数"""
    print("=" * 60)
    print("虚拟文件树存储 - 基本使用示例")
    print("=" * 60)

    # 1. 创建系统实例
    print("\n1. 初始化系统...")
    system = FileTreeSystem({
        "system_name": "示例文件树",
        "log_level": "WARNING",
        "cache_size": 100
    })

    info = system.get_system_info()
    print(f"   系统名称: {info['system_name']}")
    print(f"   节点数: {info['node_count']}, 深度: {info['tree_depth']}")

    # 2. 种子树
    print("\n2. 初始树结构:")
    for line in system.render_tree().splitlines():
        print(f"   {line}")

    # 3. 搜索
    print("\n3. 搜索 'ton':")
    for item in system.search("ton")["results"]:
        print(f"   {item['path']} (id={item['id']})")

    # 4. 创建节点
    print("\n4. 创建节点...")
    lib = system.create_directory("root", "lib")
    print(f"   创建目录: {lib['node']['name']} (id={lib['node']['id']})")

    for name, ext in [("util", ".ts"), ("util", ".ts"), ("README", "md")]:
        result = system.create_file(lib["node"]["id"], name, ext)
        print(f"   创建文件: {result['node']['name']} (id={result['node']['id']})")

    # 5. 错误处理
    print("\n5. 错误处理:")
    for label, result in [
        ("在文件下创建", system.create_file("index.tsx", "x")),
        ("读取不存在的节点", system.get_node("missing")),
        ("删除根节点", system.delete("root")),
    ]:
        print(f"   {label}: status={result['status']}, code={result['code']}")

    # 6. 重命名与删除
    print("\n6. 重命名与删除...")
    system.rename("index.tsx", "main.tsx")
    system.delete("components")
    for line in system.render_tree(show_ids=True).splitlines():
        print(f"   {line}")

    # 7. 导出
    print("\n7. 导出JSON...")
    exported = system.export_json()
    print(f"   导出字节数: {len(exported)}")

    # 8. 重置
    print("\n8. 重置到种子树...")
    system.reset()
    info = system.get_system_info()
    print(f"   节点数: {info['node_count']}")
    print(f"   缓存统计: {info['cache']}")

    print("\n" + "=" * 60)
    print("示例运行完成！")
    print("=" * 60)


if __name__ == "__main__":
    main()

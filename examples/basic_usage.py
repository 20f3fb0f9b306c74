"""
基础使用示例
"""

import tempfile
from pathlib import Path

from dbeaver_config_tool import (
    ConfigWriter,
    DBeaverSetupError,
    build_documents,
    parse_connections,
)


def basic_usage_example():
    """基础使用示例"""

    connections_json = (Path(__file__).parent / "connections.json").read_text(
        encoding="utf-8"
    )

    try:
        descriptors = parse_connections(connections_json)
        result = build_documents(descriptors)
    except DBeaverSetupError as e:
        print(f"❌ 连接描述无效: {e}")
        return

    print(f"✅ 已映射 {result.connection_count} 个连接")
    for connection_id, entry in result.data_sources["connections"].items():
        print(f"  {connection_id}: {entry['configuration']['url']}")

    # 写入临时目录，避免覆盖真实的 DBeaver 配置
    output_dir = Path(tempfile.mkdtemp()) / ".dbeaver"
    try:
        files = ConfigWriter(output_dir).write(result)
        print(f"✅ 配置已写入: {files.data_sources.parent}")
    except DBeaverSetupError as e:
        print(f"❌ 写入配置失败: {e}")


if __name__ == "__main__":
    basic_usage_example()

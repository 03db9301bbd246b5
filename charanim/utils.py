"""工具函数模块"""

import logging
import sys
from pathlib import Path
from typing import Union


def resource_path(relative_path: str) -> str:
    """获取打包后的资源绝对路径

    支持 PyInstaller 打包后的环境和开发环境

    Args:
        relative_path: 相对路径

    Returns:
        绝对路径
    """
    try:
        # PyInstaller 创建的临时目录
        base_path = sys._MEIPASS  # type: ignore
    except AttributeError:
        # 开发环境
        base_path = Path(__file__).resolve().parent.parent
    return str(Path(base_path) / relative_path)


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """配置根日志（仅在程序入口调用）

    Args:
        level: 日志级别，可为名称或数值
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""Character View Demo - 主入口

资源目录（配置项 asset_dir，默认 <项目根>/assets/gifs）需包含每个状态的动画：

    assets/gifs/
        characterIdle.gif
        characterDancing.gif
        characterLevelUp.gif
        characterGameOver.gif

文件名为 "<file_prefix><状态后缀><asset_extension>"，前缀和扩展名可在配置文件中修改。
"""

import logging
import tkinter as tk
from pathlib import Path
from typing import Any, Dict, List

from charanim.animation.cache import AnimationCache
from charanim.animation.dispatch import TkDispatcher
from charanim.animation.loader import FileResourceLoader
from charanim.animation.states import CharacterState, cache_key
from charanim.config import load_config
from charanim.constants import WINDOW_TITLE
from charanim.ui.character_view import DemoCharacterScreen
from charanim.utils import setup_logging

logger = logging.getLogger(__name__)


def check_assets(config: Dict[str, Any]) -> List[Path]:
    """检查资源目录，返回缺失的动画文件

    Args:
        config: 配置字典

    Returns:
        缺失文件路径列表
    """
    loader = FileResourceLoader(config["asset_dir"], config["asset_extension"])
    missing = [
        loader.path_for(cache_key(config["file_prefix"], state))
        for state in CharacterState
    ]
    missing = [path for path in missing if not path.is_file()]
    if missing:
        logger.warning(
            "资源目录 %s 缺少动画文件: %s",
            loader.base_dir,
            ", ".join(path.name for path in missing),
        )
    return missing


def install_fatal_handler(root: tk.Misc) -> List[BaseException]:
    """调试模式下让主循环回调中的异常终止程序

    Tk 默认只打印回调异常并继续运行；这里记录异常并退出主循环，
    由 main 在 mainloop 返回后重新抛出。

    Returns:
        记录到的异常列表
    """
    fatal: List[BaseException] = []

    def report(exc_type, exc_value, exc_tb) -> None:
        logger.critical(
            "主循环回调异常，程序退出", exc_info=(exc_type, exc_value, exc_tb)
        )
        fatal.append(exc_value)
        root.quit()

    root.report_callback_exception = report
    return fatal


def main():
    """主函数"""
    config = load_config()
    setup_logging(logging.DEBUG if config["debug"] else config["log_level"])
    check_assets(config)

    root = tk.Tk()
    root.title(WINDOW_TITLE)
    fatal = install_fatal_handler(root) if config["debug"] else []

    cache = AnimationCache(
        FileResourceLoader(config["asset_dir"], config["asset_extension"]),
        dispatch=TkDispatcher(root),
        workers=config["decode_workers"],
        debug=config["debug"],
    )
    try:
        DemoCharacterScreen(
            root,
            cache,
            filename=config["file_prefix"],
            scale=float(config["scale"]),
            preload_on_init=config["preload_on_init"],
        )
        root.mainloop()
    except KeyboardInterrupt:
        logger.info("程序已退出")
    finally:
        cache.shutdown(wait=False)

    if fatal:
        raise fatal[0]


if __name__ == "__main__":
    main()

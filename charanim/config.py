"""配置管理模块"""

import json
import logging
import os
from typing import Any, Dict, Optional

from charanim.constants import (
    ASSET_EXTENSION,
    CONFIG_FILE,
    DEBUG_ENV,
    DEFAULT_DECODE_WORKERS,
    DEFAULT_FILE_PREFIX,
    DEFAULT_SCALE,
    GIF_DIR,
)

logger = logging.getLogger(__name__)

# 配置缓存
_config_cache: Optional[Dict[str, Any]] = None


def _default_config() -> Dict[str, Any]:
    """返回默认配置"""
    return {
        "asset_dir": str(GIF_DIR),
        "file_prefix": DEFAULT_FILE_PREFIX,
        "asset_extension": ASSET_EXTENSION,
        "debug": False,
        "decode_workers": DEFAULT_DECODE_WORKERS,
        "scale": DEFAULT_SCALE,
        "preload_on_init": True,
        "log_level": "INFO",
    }


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(force_refresh: bool = False) -> Dict[str, Any]:
    """加载配置，使用缓存减少IO

    配置文件中缺少的键使用默认值；环境变量 CHARANIM_DEBUG 优先于文件中的 debug。

    Args:
        force_refresh: 是否强制刷新缓存

    Returns:
        配置字典
    """
    global _config_cache

    if not force_refresh and _config_cache is not None:
        return _config_cache.copy()

    data = _default_config()
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            data.update(loaded)
        else:
            logger.warning("配置文件格式无效，使用默认配置")
    except FileNotFoundError:
        logger.info("配置文件不存在，使用默认配置")
    except json.JSONDecodeError as e:
        logger.warning("配置文件损坏 (%s)，使用默认配置", e)

    debug = _env_flag(DEBUG_ENV)
    if debug is not None:
        data["debug"] = debug

    _config_cache = data.copy()
    return data


def get_config_value(key: str, default=None) -> Any:
    """获取单个配置值

    Args:
        key: 配置键名
        default: 默认值

    Returns:
        配置值
    """
    config = load_config()
    return config.get(key, default)

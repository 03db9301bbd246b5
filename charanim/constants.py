"""常量定义模块"""

from pathlib import Path
import os

# ============ 路径配置 ============
BASE_DIR = Path(__file__).resolve().parent.parent
GIF_DIR = BASE_DIR / "assets" / "gifs"
CONFIG_FILE = Path(
    os.environ.get("CHARANIM_CONFIG", Path.home() / ".charanim_config.json")
)
DEBUG_ENV = "CHARANIM_DEBUG"

# ============ 资源配置 ============
DEFAULT_FILE_PREFIX = "character"  # characterIdle.gif, characterDancing.gif...
ASSET_EXTENSION = ".gif"

# ============ 帧时长配置 ============
DEFAULT_FRAME_DURATION = 1.0 / 12.0  # 秒
MIN_FRAME_DELAY = 0.02  # 低于该值的延迟视为无效(秒)
DEFAULT_DELAY_MS = 100  # 播放器缺省帧间隔(ms)

# ============ 解码线程 ============
DEFAULT_DECODE_WORKERS = 1  # 单串行队列
DECODE_THREAD_PREFIX = "gif-cache-decode"

# ============ 显示配置 ============
DEFAULT_SCALE = 1.0
BACKGROUND_COLOR = "white"
WINDOW_TITLE = "Character View Demo"

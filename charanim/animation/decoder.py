"""动画帧解码（Pillow -> RGBA 帧序列）"""

from __future__ import annotations

import io
import itertools
import logging
import struct
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image

from charanim.animation.errors import DecodeError, EmptyInput
from charanim.constants import DEFAULT_FRAME_DURATION, MIN_FRAME_DELAY

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Frame:
    """单帧：RGBA 位图 + 显示时长（秒）"""

    image: Image.Image
    duration: float


@dataclass(frozen=True, slots=True)
class DecodedAnimation:
    """解码后的动画，帧序列创建后不再修改"""

    frames: Tuple[Frame, ...]
    duration: float

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def size(self) -> Tuple[int, int]:
        return self.frames[0].image.size

    def delays_ms(self) -> List[int]:
        """每帧延迟（毫秒，至少 1），供 after 循环使用"""
        return [max(1, int(round(frame.duration * 1000))) for frame in self.frames]


def resolve_frame_duration(
    unclamped: Optional[float], clamped: Optional[float] = None
) -> float:
    """按优先级确定单帧时长

    依次尝试未截断延迟、截断延迟；低于 MIN_FRAME_DELAY 或缺失的值
    均视为无效，最终回退到 1/12 秒。

    Args:
        unclamped: 未截断的延迟（秒）
        clamped: 截断后的延迟（秒）

    Returns:
        帧时长（秒）
    """
    for delay in (unclamped, clamped):
        if delay is not None and delay >= MIN_FRAME_DELAY:
            return float(delay)
    return DEFAULT_FRAME_DURATION


def _frame_delay(image: Image.Image) -> Optional[float]:
    # Pillow 的 duration 为原始延迟(ms)
    duration = image.info.get("duration")
    if duration is None:
        return None
    try:
        return float(duration) / 1000.0
    except (TypeError, ValueError):
        return None


def decode_animation(raw: bytes) -> DecodedAnimation:
    """解码动画图片字节

    Args:
        raw: GIF/APNG/WebP 等多帧图片的原始字节

    Returns:
        DecodedAnimation

    Raises:
        EmptyInput: 输入为空
        DecodeError: 无法识别或解出 0 帧
    """
    if not raw:
        raise EmptyInput("动画数据为空")

    start_time = time.perf_counter()
    try:
        source = Image.open(io.BytesIO(raw))
    except Exception as e:
        # Pillow 对损坏数据抛出的异常类型不固定
        raise DecodeError(f"无法识别的图片数据: {e}") from e

    frames = []
    with source:
        for i in itertools.count():
            try:
                source.seek(i)
            except EOFError:
                break
            except (OSError, ValueError, SyntaxError, IndexError, struct.error) as e:
                logger.warning("第 %d 帧定位失败，停止解码: %s", i, e)
                break
            try:
                bitmap = source.convert("RGBA")
            except (OSError, ValueError, IndexError, struct.error) as e:
                logger.warning("第 %d 帧解码失败，停止解码: %s", i, e)
                break
            duration = resolve_frame_duration(_frame_delay(source))
            frames.append(Frame(image=bitmap, duration=duration))

    if not frames:
        raise DecodeError("未能解出任何帧")

    total = sum(frame.duration for frame in frames)
    if total <= 0:
        total = len(frames) * DEFAULT_FRAME_DURATION

    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    logger.debug("动画解码耗时 %dms | frames=%d", elapsed_ms, len(frames))

    return DecodedAnimation(frames=tuple(frames), duration=total)

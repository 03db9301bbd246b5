from __future__ import annotations

import io
import queue
import threading
from typing import Callable, Dict, List, Optional, Sequence

import pytest
from PIL import Image

from charanim.animation.errors import ResourceNotFound

COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (0, 255, 255)]


def make_gif(durations_ms: Sequence[int], size=(8, 8)) -> bytes:
    """生成多帧 GIF，每帧颜色不同以免 Pillow 合并相同帧"""
    frames = [
        Image.new("RGB", size, COLORS[i % len(COLORS)]) for i in range(len(durations_ms))
    ]
    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=list(durations_ms),
        loop=0,
    )
    return buffer.getvalue()


class DictLoader:
    """内存资源加载器，可用 gate 卡住后台任务"""

    def __init__(self, assets: Dict[str, bytes], gate: Optional[threading.Event] = None):
        self.assets = assets
        self.gate = gate
        self.calls: List[str] = []
        self.started = threading.Event()
        self._lock = threading.Lock()

    def load_bytes(self, key: str) -> bytes:
        with self._lock:
            self.calls.append(key)
        self.started.set()
        if self.gate is not None:
            assert self.gate.wait(5), "gate was never released"
        try:
            return self.assets[key]
        except KeyError:
            raise ResourceNotFound(key) from None


class PumpDispatcher:
    """模拟展示线程：投递进队列，测试里手动执行"""

    def __init__(self) -> None:
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def __call__(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    def pending(self) -> int:
        return self._queue.qsize()

    def pump(self) -> int:
        count = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return count
            fn()
            count += 1


@pytest.fixture()
def gif_bytes() -> bytes:
    return make_gif([10, 80, 80, 10])


@pytest.fixture()
def dispatcher() -> PumpDispatcher:
    return PumpDispatcher()


@pytest.fixture()
def character_assets() -> Dict[str, bytes]:
    return {
        "characterIdle": make_gif([100, 100]),
        "characterDancing": make_gif([50, 50, 50]),
        "characterLevelUp": make_gif([40, 40, 40, 40]),
        "characterGameOver": make_gif([200]),
    }

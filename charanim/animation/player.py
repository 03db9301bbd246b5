"""帧循环播放（基于 after 定时）"""

from __future__ import annotations

import tkinter as tk
from typing import Any, Callable, Optional, Sequence

from charanim.constants import DEFAULT_DELAY_MS


class AnimationPlayer:
    """按每帧延迟无限循环播放

    说明：render 负责把单帧画到界面上，播放器只负责定时与循环。
    """

    def __init__(self, root: tk.Misc, render: Callable[[Any], None]) -> None:
        self.root = root
        self.render = render
        self.frames: list = []
        self.delays: list = []
        self.frame_index = 0
        self._after_id: Optional[str] = None

    @property
    def is_playing(self) -> bool:
        return self._after_id is not None

    def play(self, frames: Sequence[Any], delays: Sequence[int]) -> None:
        """从第一帧开始播放新的帧序列"""
        self.stop()
        self.frames = list(frames)
        self.delays = list(delays)
        self.frame_index = 0
        self._animate()

    def stop(self) -> None:
        """停止播放，界面停在当前帧"""
        if self._after_id is None:
            return
        try:
            self.root.after_cancel(self._after_id)
        except tk.TclError:
            pass
        self._after_id = None

    def _animate(self) -> None:
        self._after_id = None
        if not self.frames:
            return

        self.render(self.frames[self.frame_index])
        if self.frame_index < len(self.delays):
            delay = self.delays[self.frame_index]
        else:
            delay = DEFAULT_DELAY_MS

        self.frame_index = (self.frame_index + 1) % len(self.frames)
        self._after_id = self.root.after(delay, self._animate)

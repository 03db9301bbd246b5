"""角色动画视图"""

from __future__ import annotations

import tkinter as tk
from typing import Dict, List, Optional

from PIL import Image, ImageTk

from charanim.animation.arbiter import RequestArbiter
from charanim.animation.cache import AnimationCache
from charanim.animation.decoder import DecodedAnimation
from charanim.animation.player import AnimationPlayer
from charanim.animation.states import CharacterState, cache_key
from charanim.constants import BACKGROUND_COLOR, DEFAULT_FILE_PREFIX, DEFAULT_SCALE

BUTTON_LABELS = {
    CharacterState.IDLE: "Idle",
    CharacterState.DANCING: "Dance",
    CharacterState.LEVEL_UP: "Level Up",
    CharacterState.GAME_OVER: "Game Over",
}


def scale_frames(
    animation: DecodedAnimation, scale: float
) -> List[ImageTk.PhotoImage]:
    """缩放动画帧并转为 PhotoImage

    Args:
        animation: 解码后的动画
        scale: 缩放比例

    Returns:
        PhotoImage 帧列表
    """
    photo_frames = []
    for frame in animation.frames:
        image = frame.image
        if scale != 1.0:
            w, h = image.size
            # 确保缩放后尺寸有效
            new_w = max(1, int(w * scale))
            new_h = max(1, int(h * scale))
            image = image.resize((new_w, new_h), Image.Resampling.LANCZOS)
        photo_frames.append(ImageTk.PhotoImage(image))
    return photo_frames


class CharacterView:
    """显示角色动画的 Label

    切换状态时先登记请求，再向缓存取动画；旧请求的迟到结果会被丢弃。
    """

    def __init__(
        self,
        master: tk.Misc,
        cache: AnimationCache,
        filename: str = DEFAULT_FILE_PREFIX,
        state: CharacterState = CharacterState.IDLE,
        scale: float = DEFAULT_SCALE,
        preload_on_init: bool = True,
        arbiter: Optional[RequestArbiter] = None,
    ) -> None:
        self.cache = cache
        self.filename = filename
        self.scale = scale
        self.arbiter = arbiter or RequestArbiter()
        self.state: Optional[CharacterState] = None
        self._photo_frames: Dict[str, List[ImageTk.PhotoImage]] = {}

        if preload_on_init:
            cache.preload_all(filename)

        self.label = tk.Label(master, bg=BACKGROUND_COLOR, bd=0)
        self.label.bind("<Destroy>", self._on_destroy)
        self.player = AnimationPlayer(master, self._render)
        self.set_state(state)

    def set_state(self, state: CharacterState) -> None:
        """切换动画状态（重复设置同一状态时忽略）"""
        if state == self.state:
            return
        self.state = state

        key = cache_key(self.filename, state)
        self.player.stop()
        self.arbiter.request(self, key)
        self.cache.get(key, self.arbiter.bind(self, key, lambda a: self._show(key, a)))

    def _show(self, key: str, animation: DecodedAnimation) -> None:
        frames = self._photo_frames.get(key)
        if frames is None:
            frames = scale_frames(animation, self.scale)
            self._photo_frames[key] = frames
        self.player.play(frames, animation.delays_ms())

    def _render(self, photo: ImageTk.PhotoImage) -> None:
        self.label.config(image=photo)

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is not self.label:
            return
        self.player.stop()
        self.arbiter.forget(self)


class DemoCharacterScreen:
    """演示界面：角色视图 + 四个状态按钮"""

    def __init__(
        self,
        root: tk.Misc,
        cache: AnimationCache,
        filename: str = DEFAULT_FILE_PREFIX,
        scale: float = DEFAULT_SCALE,
        preload_on_init: bool = True,
    ) -> None:
        self.root = root
        self.frame = tk.Frame(root, bg=BACKGROUND_COLOR, padx=16, pady=16)
        self.frame.pack(fill=tk.BOTH, expand=True)

        self.view = CharacterView(
            self.frame,
            cache,
            filename=filename,
            scale=scale,
            preload_on_init=preload_on_init,
        )
        self.view.label.pack(pady=(0, 16))

        buttons = tk.Frame(self.frame, bg=BACKGROUND_COLOR)
        buttons.pack()
        for state in CharacterState:
            tk.Button(
                buttons,
                text=BUTTON_LABELS[state],
                command=lambda s=state: self.view.set_state(s),
            ).pack(side=tk.LEFT, padx=4)

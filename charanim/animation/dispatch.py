"""结果投递到展示线程"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    import tkinter as tk

Dispatcher = Callable[[Callable[[], None]], None]


def call_inline(fn: Callable[[], None]) -> None:
    """在当前线程直接执行（无 UI 主循环时使用）"""
    fn()


class TkDispatcher:
    """通过 root.after(0, ...) 回到 Tk 主线程执行"""

    def __init__(self, root: "tk.Misc") -> None:
        self.root = root

    def __call__(self, fn: Callable[[], None]) -> None:
        self.root.after(0, fn)

"""资源缺失/解码失败的诊断通道"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from charanim.animation.dispatch import Dispatcher, call_inline
from charanim.animation.errors import AnimationAssetError, AnimationError

logger = logging.getLogger(__name__)


def _fail(key: str, error: AnimationError) -> None:
    raise AnimationAssetError(key, error) from error


class Diagnostics:
    """上报动画资源问题

    发布模式下只记录警告，key 保持缺失；调试模式下额外在展示线程
    抛出 AnimationAssetError，让打包错误在开发阶段立即暴露。
    """

    def __init__(self, debug: bool = False, dispatch: Optional[Dispatcher] = None):
        self.debug = debug
        self._dispatch = dispatch or call_inline

    def report(self, key: str, error: AnimationError) -> None:
        if not self.debug:
            logger.warning("动画不可用 %s: %s", key, error)
            return
        logger.error("动画资源错误 %s: %s", key, error)
        self._dispatch(partial(_fail, key, error))

"""请求仲裁：丢弃过期的异步投递"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Optional

from charanim.animation.decoder import DecodedAnimation


class RequestArbiter:
    """记录每个显示面最近一次请求的 key

    异步结果到达时，只有 key 仍与该显示面的最新请求一致才会应用，
    否则直接丢弃。只在展示线程调用。
    """

    def __init__(self) -> None:
        self._tokens: Dict[Hashable, str] = {}

    def request(self, surface: Hashable, key: str) -> None:
        """登记新请求（必须在发起异步加载前调用）"""
        self._tokens[surface] = key

    def current(self, surface: Hashable) -> Optional[str]:
        return self._tokens.get(surface)

    def is_current(self, surface: Hashable, key: str) -> bool:
        return self._tokens.get(surface) == key

    def forget(self, surface: Hashable) -> None:
        self._tokens.pop(surface, None)

    def apply_if_current(
        self, surface: Hashable, key: str, apply: Callable[[], None]
    ) -> bool:
        """key 仍是最新请求时执行 apply

        Returns:
            是否已应用
        """
        if not self.is_current(surface, key):
            return False
        apply()
        return True

    def bind(
        self,
        surface: Hashable,
        key: str,
        on_result: Callable[[DecodedAnimation], None],
    ) -> Callable[[Optional[DecodedAnimation]], None]:
        """生成交给 AnimationCache.get 的回调

        结果为 None（加载失败）或请求已过期时不做任何事，显示面保持原样。
        """

        def deliver(animation: Optional[DecodedAnimation]) -> None:
            if animation is None:
                return
            self.apply_if_current(surface, key, lambda: on_result(animation))

        return deliver

"""动画缓存（按 key 解码一次，常驻内存）"""

from __future__ import annotations

import logging
import threading
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Dict, List, Optional, Protocol, Set

from charanim.animation.decoder import DecodedAnimation, decode_animation
from charanim.animation.diagnostics import Diagnostics
from charanim.animation.dispatch import Dispatcher, call_inline
from charanim.animation.errors import AnimationAssetError, AnimationError
from charanim.animation.states import CharacterState, cache_key
from charanim.constants import DECODE_THREAD_PREFIX, DEFAULT_DECODE_WORKERS

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[DecodedAnimation]], None]


class ResourceLoader(Protocol):
    def load_bytes(self, key: str) -> bytes: ...


class AnimationCache:
    """按 key 缓存解码后的动画

    说明：
    - 已缓存的 key 由 get 在调用线程同步返回；
    - 未缓存的 key 在后台线程加载并解码，同一 key 同时只有一个任务，
      所有等待者拿到同一个结果（失败时均为 None）；
    - 结果通过 dispatch 投递到展示线程；
    - 条目写入一次后不再修改，也不会淘汰。
    """

    def __init__(
        self,
        loader: ResourceLoader,
        decoder: Callable[[bytes], DecodedAnimation] = decode_animation,
        dispatch: Optional[Dispatcher] = None,
        diagnostics: Optional[Diagnostics] = None,
        workers: int = DEFAULT_DECODE_WORKERS,
        debug: bool = False,
    ) -> None:
        self._loader = loader
        self._decoder = decoder
        self._dispatch = dispatch or call_inline
        self._diagnostics = diagnostics or Diagnostics(debug, self._dispatch)
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, int(workers)), thread_name_prefix=DECODE_THREAD_PREFIX
        )
        self._lock = threading.Lock()
        self._entries: Dict[str, DecodedAnimation] = {}
        # 正在解码的 key -> 等待回调
        self._pending: Dict[str, List[Callback]] = {}
        self._futures: Set[Future] = set()
        # 调试模式下的资源错误，记录后所有调用都会重新抛出
        self._fatal: Optional[AnimationAssetError] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def peek(self, key: str) -> Optional[DecodedAnimation]:
        """同步查询，未缓存返回 None"""
        with self._lock:
            return self._entries.get(key)

    def is_cached(self, key: str) -> bool:
        return self.peek(key) is not None

    def is_loading(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def preload_all(self, prefix: str) -> None:
        """预加载某前缀下的全部状态动画

        Args:
            prefix: 文件名前缀，例如 "character" -> characterIdle, characterDancing...
        """
        self._raise_if_fatal()
        for state in CharacterState:
            self.preload(cache_key(prefix, state))

    def preload(self, key: str) -> None:
        """后台预加载，已缓存或正在解码时忽略"""
        self._raise_if_fatal()
        with self._lock:
            if key in self._entries or key in self._pending:
                return
            self._pending[key] = []
        self._submit(key)

    def get(self, key: str, callback: Callback) -> None:
        """获取动画

        已缓存时立即在当前线程回调；否则排队等待后台解码，完成后经
        dispatch 回调（失败为 None）。每次调用只回调一次。

        Args:
            key: 缓存 key
            callback: 结果回调
        """
        self._raise_if_fatal()
        with self._lock:
            animation = self._entries.get(key)
            if animation is None:
                waiters = self._pending.get(key)
                start_job = waiters is None
                if start_job:
                    self._pending[key] = [callback]
                else:
                    waiters.append(callback)

        # 快速路径
        if animation is not None:
            callback(animation)
            return

        if start_job:
            self._submit(key)

    def join(self, timeout: Optional[float] = None) -> bool:
        """等待已提交的任务完成

        Returns:
            超时前全部完成返回 True

        Raises:
            AnimationAssetError: 调试模式下有资源缺失或损坏
        """
        with self._lock:
            jobs = list(self._futures)
        _, not_done = futures.wait(jobs, timeout=timeout)
        for job in jobs:
            if job.done() and not job.cancelled():
                self._record_fatal(job.exception())
        self._raise_if_fatal()
        return not not_done

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _submit(self, key: str) -> None:
        try:
            future = self._executor.submit(self._run_job, key)
        except RuntimeError:
            # 执行器已关闭
            with self._lock:
                waiters = self._pending.pop(key, [])
            logger.error("缓存已关闭，无法加载 %s", key)
            for callback in waiters:
                self._dispatch(partial(callback, None))
            return
        with self._lock:
            self._futures.add(future)
        future.add_done_callback(self._on_job_done)

    def _on_job_done(self, future: Future) -> None:
        with self._lock:
            self._futures.discard(future)
        if future.cancelled():
            return
        error = future.exception()
        if isinstance(error, AnimationAssetError):
            self._record_fatal(error)
        elif error is not None:
            logger.error("动画解码任务异常", exc_info=error)

    def _record_fatal(self, error: Optional[BaseException]) -> None:
        if not isinstance(error, AnimationAssetError):
            return
        with self._lock:
            if self._fatal is not None:
                return
            self._fatal = error
        logger.critical("调试模式下动画资源不可用: %s", error.key)

    def _raise_if_fatal(self) -> None:
        if self._fatal is not None:
            raise self._fatal

    def _run_job(self, key: str) -> None:
        animation: Optional[DecodedAnimation] = None
        failure: Optional[AnimationError] = None
        try:
            # 同 key 的任务可能已在前面完成
            animation = self.peek(key)
            if animation is None:
                animation = self._decoder(self._loader.load_bytes(key))
        except AnimationError as e:
            failure = e
        finally:
            with self._lock:
                if animation is not None:
                    animation = self._entries.setdefault(key, animation)
                waiters = self._pending.pop(key, [])
            for callback in waiters:
                self._dispatch(partial(callback, animation))

        if failure is not None:
            self._diagnostics.report(key, failure)
        else:
            logger.debug("动画已缓存 %s | frames=%d", key, animation.frame_count)

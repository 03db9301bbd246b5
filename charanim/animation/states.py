"""角色动画状态"""

from __future__ import annotations

from enum import Enum


class CharacterState(Enum):
    """角色动画状态

    成员值即文件名后缀（不含扩展名），完整文件名为 "<前缀><后缀>.gif"。
    """

    IDLE = "Idle"
    DANCING = "Dancing"
    LEVEL_UP = "LevelUp"
    GAME_OVER = "GameOver"

    @property
    def suffix(self) -> str:
        return self.value


def cache_key(prefix: str, state: CharacterState) -> str:
    """由文件名前缀和状态生成缓存 key

    Args:
        prefix: 文件名前缀，例如 "character"
        state: 动画状态

    Returns:
        缓存 key，例如 "characterIdle"
    """
    return prefix + state.suffix

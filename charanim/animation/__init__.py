"""动画缓存与解码"""

from charanim.animation.arbiter import RequestArbiter
from charanim.animation.cache import AnimationCache
from charanim.animation.decoder import (
    DecodedAnimation,
    Frame,
    decode_animation,
    resolve_frame_duration,
)
from charanim.animation.errors import (
    AnimationAssetError,
    AnimationError,
    DecodeError,
    EmptyInput,
    ResourceNotFound,
)
from charanim.animation.states import CharacterState, cache_key

__all__ = [
    "AnimationAssetError",
    "AnimationCache",
    "AnimationError",
    "CharacterState",
    "DecodeError",
    "DecodedAnimation",
    "EmptyInput",
    "Frame",
    "RequestArbiter",
    "ResourceNotFound",
    "cache_key",
    "decode_animation",
    "resolve_frame_duration",
]

"""动画资源错误类型"""


class AnimationError(Exception):
    """动画加载/解码错误基类"""


class ResourceNotFound(AnimationError):
    """找不到 key 对应的资源字节"""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        message = f"找不到动画资源: {key}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DecodeError(AnimationError):
    """资源字节无法解码为动画帧"""


class EmptyInput(DecodeError):
    """资源字节为空"""


class AnimationAssetError(AssertionError):
    """调试模式下的资源打包错误（缺失或损坏）"""

    def __init__(self, key: str, cause: AnimationError) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"动画资源不可用: {key}: {cause}")

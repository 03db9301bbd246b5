"""动画资源加载"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from charanim.animation.errors import ResourceNotFound
from charanim.constants import ASSET_EXTENSION, GIF_DIR
from charanim.utils import resource_path


class FileResourceLoader:
    """按 key 从资源目录读取动画文件字节

    文件路径为 "<base_dir>/<key><extension>"。
    """

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        extension: str = ASSET_EXTENSION,
    ) -> None:
        if base_dir is None:
            base_dir = resource_path(str(GIF_DIR))
        self.base_dir = Path(base_dir)
        self.extension = extension

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{key}{self.extension}"

    def load_bytes(self, key: str) -> bytes:
        """读取 key 对应的资源字节

        Raises:
            ResourceNotFound: 文件不存在或不可读
        """
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ResourceNotFound(key, f"缺少文件 {path.name}") from e
        except OSError as e:
            raise ResourceNotFound(key, f"无法读取 {path.name}: {e}") from e

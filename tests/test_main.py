from __future__ import annotations

import logging
from pathlib import Path

from charanim.animation.errors import AnimationAssetError, ResourceNotFound
from charanim.main import check_assets, install_fatal_handler


class FakeRoot:
    def __init__(self) -> None:
        self.quit_calls = 0
        self.report_callback_exception = None

    def quit(self) -> None:
        self.quit_calls += 1


def _config(asset_dir: Path) -> dict:
    return {
        "asset_dir": str(asset_dir),
        "asset_extension": ".gif",
        "file_prefix": "character",
    }


def test_check_assets_lists_missing_state_files(tmp_path: Path, caplog) -> None:
    (tmp_path / "characterIdle.gif").write_bytes(b"GIF89a")
    (tmp_path / "characterDancing.gif").write_bytes(b"GIF89a")

    with caplog.at_level(logging.WARNING, logger="charanim.main"):
        missing = check_assets(_config(tmp_path))

    assert sorted(path.name for path in missing) == [
        "characterGameOver.gif",
        "characterLevelUp.gif",
    ]
    assert "characterLevelUp.gif" in caplog.text


def test_check_assets_complete_directory(tmp_path: Path) -> None:
    for name in ("Idle", "Dancing", "LevelUp", "GameOver"):
        (tmp_path / f"character{name}.gif").write_bytes(b"GIF89a")

    assert check_assets(_config(tmp_path)) == []


def test_check_assets_missing_directory(tmp_path: Path) -> None:
    assert len(check_assets(_config(tmp_path / "nowhere"))) == 4


def test_fatal_handler_stops_main_loop() -> None:
    root = FakeRoot()
    fatal = install_fatal_handler(root)
    error = AnimationAssetError("characterIdle", ResourceNotFound("characterIdle"))

    root.report_callback_exception(type(error), error, None)

    assert fatal == [error]
    assert root.quit_calls == 1

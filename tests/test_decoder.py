from __future__ import annotations

import dataclasses
import io

import pytest
from PIL import Image

from charanim.animation import decoder
from charanim.animation.decoder import decode_animation, resolve_frame_duration
from charanim.animation.errors import DecodeError, EmptyInput
from conftest import make_gif

DEFAULT = 1.0 / 12.0


def test_four_frame_gif_floors_short_delays(gif_bytes: bytes) -> None:
    animation = decode_animation(gif_bytes)

    assert animation.frame_count == 4
    durations = [frame.duration for frame in animation.frames]
    assert durations == pytest.approx([DEFAULT, 0.08, 0.08, DEFAULT])
    assert animation.duration == pytest.approx(0.32667, abs=1e-4)


def test_frames_are_rgba_and_sized(gif_bytes: bytes) -> None:
    animation = decode_animation(gif_bytes)
    assert all(frame.image.mode == "RGBA" for frame in animation.frames)
    assert animation.size == (8, 8)
    assert animation.frames[1].image.getpixel((0, 0))[:3] == (0, 255, 0)


def test_delays_ms_follow_frame_durations(gif_bytes: bytes) -> None:
    assert decode_animation(gif_bytes).delays_ms() == [83, 80, 80, 83]


def test_decoded_animation_is_immutable(gif_bytes: bytes) -> None:
    animation = decode_animation(gif_bytes)
    assert isinstance(animation.frames, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        animation.duration = 1.0  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        animation.frames[0].duration = 1.0  # type: ignore[misc]


@pytest.mark.parametrize(
    "unclamped, clamped, expected",
    [
        (0.005, None, DEFAULT),
        (0.05, None, 0.05),
        (0.02, None, 0.02),
        (None, 0.1, 0.1),
        (0.01, 0.1, 0.1),
        (0.2, 0.1, 0.2),
        (None, 0.01, DEFAULT),
        (None, None, DEFAULT),
        (-1.0, None, DEFAULT),
    ],
)
def test_resolve_frame_duration(unclamped, clamped, expected) -> None:
    assert resolve_frame_duration(unclamped, clamped) == pytest.approx(expected)


def test_single_frame_image_without_delay_uses_default() -> None:
    buffer = io.BytesIO()
    Image.new("RGBA", (4, 4), (1, 2, 3, 255)).save(buffer, format="PNG")

    animation = decode_animation(buffer.getvalue())

    assert animation.frame_count == 1
    assert animation.duration == pytest.approx(DEFAULT)


def test_total_duration_falls_back_when_sum_not_positive(monkeypatch) -> None:
    monkeypatch.setattr(decoder, "resolve_frame_duration", lambda *_: 0.0)

    animation = decode_animation(make_gif([100, 100, 100]))

    assert animation.frame_count == 3
    assert animation.duration == pytest.approx(3 * DEFAULT)


def test_empty_input_raises() -> None:
    with pytest.raises(EmptyInput):
        decode_animation(b"")


def test_corrupt_input_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_animation(b"definitely not an image")


def test_empty_input_is_a_decode_error() -> None:
    assert issubclass(EmptyInput, DecodeError)


def test_gif_cut_inside_later_frame_keeps_leading_frames() -> None:
    raw = make_gif([100, 100, 100], size=(64, 64))[:200]

    try:
        animation = decode_animation(raw)
    except DecodeError:
        return
    assert 1 <= animation.frame_count < 3
    assert all(frame.image.mode == "RGBA" for frame in animation.frames)


def test_gif_cut_inside_first_frame_raises_decode_error() -> None:
    raw = make_gif([100, 100, 100], size=(64, 64))[:100]

    with pytest.raises(DecodeError):
        decode_animation(raw)


def test_gif_header_only_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_animation(make_gif([100, 100])[:13])

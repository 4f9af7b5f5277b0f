from __future__ import annotations

import io
import itertools
import struct
import wave

import pytest

from aes5.application.event_publisher import InMemoryEventPublisher


def make_wav_bytes(*, duration_seconds: float = 0.05, sample_rate: int = 48_000, channels: int = 2) -> bytes:
    frames = int(duration_seconds * sample_rate)
    with io.BytesIO() as buffer:
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(2)
            wav.setframerate(sample_rate)
            wav.writeframes(b"\x00\x00" * channels * frames)
        return buffer.getvalue()


def make_float_wav_bytes(*, sample_rate: int = 96_000, channels: int = 1) -> bytes:
    fmt_body = struct.pack("<HHIIHH", 3, channels, sample_rate, sample_rate * channels * 4, channels * 4, 32)
    data_body = b"\x00" * 64
    chunks = b"fmt " + struct.pack("<I", len(fmt_body)) + fmt_body + b"data" + struct.pack("<I", len(data_body)) + data_body
    return b"RIFF" + struct.pack("<I", 4 + len(chunks)) + b"WAVE" + chunks


def make_flac_bytes(*, duration_seconds: float = 1.0, sample_rate: int = 44_100, channels: int = 2) -> bytes:
    total_samples = int(duration_seconds * sample_rate)
    min_block = (4096).to_bytes(2, "big")
    max_block = (4096).to_bytes(2, "big")
    min_frame = (0).to_bytes(3, "big")
    max_frame = (0).to_bytes(3, "big")
    sample_field = (
        ((sample_rate & 0xFFFFF) << 44)
        | (((channels - 1) & 0x7) << 41)
        | ((15 & 0x1F) << 36)
        | (total_samples & 0xFFFFFFFFF)
    )
    stream_info = min_block + max_block + min_frame + max_frame + sample_field.to_bytes(8, "big") + (b"\x00" * 16)
    return b"fLaC" + bytes([0x80]) + (34).to_bytes(3, "big") + stream_info + b"\x00\x00"


_MPEG_SAMPLE_INDEX = {
    0x3: {44_100: 0, 48_000: 1, 32_000: 2},
    0x2: {22_050: 0, 24_000: 1, 16_000: 2},
    0x0: {11_025: 0, 12_000: 1, 8_000: 2},
}


def make_mp3_bytes(
    *,
    sample_rate: int = 44_100,
    version_bits: int = 0x3,
    layer_bits: int = 0x1,
    mono: bool = False,
    frames: int = 4,
) -> bytes:
    header = 0x7FF << 21
    header |= version_bits << 19
    header |= layer_bits << 17
    header |= 0x1 << 16  # no CRC
    header |= 9 << 12  # 128 kbps for MPEG-1 Layer III
    header |= _MPEG_SAMPLE_INDEX[version_bits][sample_rate] << 10
    header |= (0x3 if mono else 0x0) << 6
    frame = header.to_bytes(4, "big") + b"\x00" * 413
    return frame * frames


def make_id3_prefixed_mp3_bytes(**kwargs) -> bytes:
    id3_payload = b"TEST" * 3
    id3_size = len(id3_payload)
    synchsafe_size = bytes(
        [
            (id3_size >> 21) & 0x7F,
            (id3_size >> 14) & 0x7F,
            (id3_size >> 7) & 0x7F,
            id3_size & 0x7F,
        ]
    )
    return b"ID3" + b"\x04\x00" + b"\x00" + synchsafe_size + id3_payload + make_mp3_bytes(**kwargs)


class FakeClock:
    """Monotonic nanosecond clock advancing ``step_ns`` per reading."""

    def __init__(self, step_ns: int = 250) -> None:
        self._ticks = itertools.count(0, step_ns)

    def __call__(self) -> int:
        return next(self._ticks)


@pytest.fixture
def wav_bytes():
    return make_wav_bytes


@pytest.fixture
def float_wav_bytes():
    return make_float_wav_bytes


@pytest.fixture
def flac_bytes():
    return make_flac_bytes


@pytest.fixture
def mp3_bytes():
    return make_mp3_bytes


@pytest.fixture
def id3_mp3_bytes():
    return make_id3_prefixed_mp3_bytes


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_publisher():
    return InMemoryEventPublisher()

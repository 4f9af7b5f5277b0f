"""Container header probing for audio-file sample-rate audits.

Only the headers needed to recover the stream's sampling frequency and channel
count are read: the WAV ``fmt `` chunk, the FLAC STREAMINFO block and the
first valid MPEG audio frame header. Payload data is never decoded.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".wav", ".flac", ".mp3")

_MPEG_VERSIONS = {0x0: "mpeg2.5", 0x2: "mpeg2", 0x3: "mpeg1"}
_MPEG_LAYERS = {0x1: 3, 0x2: 2, 0x3: 1}
_MPEG_SAMPLE_RATES = {
    "mpeg1": (44_100, 48_000, 32_000),
    "mpeg2": (22_050, 24_000, 16_000),
    "mpeg2.5": (11_025, 12_000, 8_000),
}
_MPEG_FRAME_SEARCH_BYTES = 8192

MAX_PROBE_FILE_SIZE_BYTES = 100 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class AudioStreamInfo:
    container: str
    codec: str
    sample_rate_hz: int
    channel_count: int
    size_bytes: int

    def as_dict(self) -> dict[str, object]:
        return {
            "container": self.container,
            "codec": self.codec,
            "sample_rate_hz": self.sample_rate_hz,
            "channel_count": self.channel_count,
            "size_bytes": self.size_bytes,
        }


@dataclass(frozen=True, slots=True)
class ProbeError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


def _size_limit(max_size_bytes: int | None) -> int:
    return MAX_PROBE_FILE_SIZE_BYTES if max_size_bytes is None else max_size_bytes


def _too_large(limit: int) -> ProbeError:
    return ProbeError("file_too_large", f"Audio file exceeds max size limit of {limit} bytes.")


def probe_audio_file(path: Path, *, max_size_bytes: int | None = None) -> AudioStreamInfo:
    if not path.exists() or not path.is_file():
        raise ProbeError("file_not_found", f"Audio file not found: {path}")

    limit = _size_limit(max_size_bytes)
    try:
        if path.stat().st_size > limit:
            raise _too_large(limit)
        raw_bytes = path.read_bytes()
    except OSError as exc:
        raise ProbeError("file_unreadable", f"Audio file is unreadable: {path}") from exc

    return probe_audio_bytes(raw_bytes, filename=path.name, max_size_bytes=limit)


def probe_audio_bytes(
    raw_bytes: bytes,
    *,
    filename: str | None = None,
    max_size_bytes: int | None = None,
) -> AudioStreamInfo:
    if not raw_bytes:
        raise ProbeError("empty_file", "Audio file is empty.")
    limit = _size_limit(max_size_bytes)
    if len(raw_bytes) > limit:
        raise _too_large(limit)

    extension = Path(filename).suffix.lower() if filename else ""
    if extension and extension not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(SUPPORTED_EXTENSIONS)
        raise ProbeError(
            "unsupported_container",
            f"Unsupported container for '{filename}'. Supported extensions: {supported}.",
        )

    if raw_bytes.startswith(b"RIFF") and raw_bytes[8:12] == b"WAVE":
        return _probe_wav(raw_bytes)
    if raw_bytes.startswith(b"fLaC"):
        return _probe_flac(raw_bytes)
    if raw_bytes.startswith(b"ID3") or raw_bytes[:1] == b"\xFF":
        return _probe_mpeg(raw_bytes)
    raise ProbeError("unsupported_container", "Unsupported or unrecognized audio container.")


def _probe_wav(raw_bytes: bytes) -> AudioStreamInfo:
    offset = 12
    while offset + 8 <= len(raw_bytes):
        chunk_id = raw_bytes[offset : offset + 4]
        chunk_size = int.from_bytes(raw_bytes[offset + 4 : offset + 8], "little")
        body_start = offset + 8
        if body_start + chunk_size > len(raw_bytes):
            raise ProbeError("corrupted_file", "Corrupted WAV file structure.")
        if chunk_id == b"fmt ":
            if chunk_size < 16:
                raise ProbeError("corrupted_file", "Corrupted WAV fmt chunk.")
            audio_format, channels, sample_rate = struct.unpack("<HHI", raw_bytes[body_start : body_start + 8])
            if audio_format not in (1, 3, 0xFFFE):
                raise ProbeError("unsupported_codec", f"Unsupported WAV codec format code: {audio_format}.")
            if not sample_rate or not channels:
                raise ProbeError("corrupted_file", "Incomplete WAV metadata.")
            codec = "ieee_float" if audio_format == 3 else "pcm"
            return AudioStreamInfo("wav", codec, sample_rate, channels, len(raw_bytes))
        offset = body_start + chunk_size + (chunk_size % 2)
    raise ProbeError("corrupted_file", "Missing WAV fmt chunk.")


def _probe_flac(raw_bytes: bytes) -> AudioStreamInfo:
    if len(raw_bytes) < 42:
        raise ProbeError("corrupted_file", "Corrupted FLAC header.")
    block_type = raw_bytes[4] & 0x7F
    block_len = int.from_bytes(raw_bytes[5:8], "big")
    if block_type != 0 or block_len != 34:
        raise ProbeError("corrupted_file", "Missing FLAC STREAMINFO metadata.")
    packed = int.from_bytes(raw_bytes[18:26], "big")
    sample_rate = (packed >> 44) & 0xFFFFF
    channels = ((packed >> 41) & 0x7) + 1
    if not sample_rate:
        raise ProbeError("corrupted_file", "FLAC STREAMINFO carries no sample rate.")
    return AudioStreamInfo("flac", "flac", sample_rate, channels, len(raw_bytes))


def _skip_id3(raw_bytes: bytes) -> int:
    if not raw_bytes.startswith(b"ID3"):
        return 0
    if len(raw_bytes) < 10:
        raise ProbeError("corrupted_file", "Corrupted ID3v2 tag.")
    tag_size = (
        ((raw_bytes[6] & 0x7F) << 21)
        | ((raw_bytes[7] & 0x7F) << 14)
        | ((raw_bytes[8] & 0x7F) << 7)
        | (raw_bytes[9] & 0x7F)
    )
    footer = 10 if raw_bytes[5] & 0x10 else 0
    return 10 + tag_size + footer


def _probe_mpeg(raw_bytes: bytes) -> AudioStreamInfo:
    offset = _skip_id3(raw_bytes)
    search_end = min(len(raw_bytes) - 4, offset + _MPEG_FRAME_SEARCH_BYTES)
    while offset <= search_end:
        if raw_bytes[offset] == 0xFF and (raw_bytes[offset + 1] & 0xE0) == 0xE0:
            header = int.from_bytes(raw_bytes[offset : offset + 4], "big")
            version_bits = (header >> 19) & 0x3
            layer_bits = (header >> 17) & 0x3
            bitrate_index = (header >> 12) & 0xF
            sample_index = (header >> 10) & 0x3
            if version_bits != 0x1 and layer_bits != 0x0 and bitrate_index not in (0, 0xF) and sample_index != 0x3:
                return _stream_info_from_frame(header, len(raw_bytes))
        offset += 1
    raise ProbeError("no_valid_frame", "No valid MPEG audio frame header found.")


def _stream_info_from_frame(header: int, size_bytes: int) -> AudioStreamInfo:
    version = _MPEG_VERSIONS[(header >> 19) & 0x3]
    layer = _MPEG_LAYERS[(header >> 17) & 0x3]
    if layer != 3:
        raise ProbeError("unsupported_codec", f"Only MPEG Layer III is supported, found Layer {layer}.")
    sample_rate = _MPEG_SAMPLE_RATES[version][(header >> 10) & 0x3]
    channels = 1 if ((header >> 6) & 0x3) == 0x3 else 2
    return AudioStreamInfo("mp3", f"{version}_layer3", sample_rate, channels, size_bytes)

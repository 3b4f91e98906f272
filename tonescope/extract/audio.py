"""
tonescope.extract.audio - Audio file validation and decoding.

Turns an audio file on disk into a WaveformInput using librosa. This is the
only place that touches codecs or the filesystem; the analysis core only
ever sees decoded samples.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tonescope.exceptions import AudioLoadError, ValidationError
from tonescope.models import WaveformInput

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = {".wav", ".mp3", ".m4a", ".flac", ".ogg", ".oga", ".opus", ".aac", ".aiff", ".aif"}


def is_audio_file(path: Path) -> bool:
    """Check whether a path looks like an audio file by MIME type or extension."""
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type and mime_type.startswith("audio/"):
        return True
    return path.suffix.lower() in AUDIO_EXTENSIONS


def validate_audio_file(path: Path, max_file_size_mb: int = 50) -> dict[str, Any]:
    """Validate an audio file exists, is audio, and is within the size limit.

    Args:
        path: Path to audio file
        max_file_size_mb: Largest accepted file size in megabytes

    Returns:
        Dict with 'path', 'size_bytes' and formatted 'size'

    Raises:
        ValidationError: If the file is missing, not audio, or too large
    """
    from tonescope.utils import format_file_size

    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Not a file: {path}")

    if not is_audio_file(path):
        raise ValidationError(f"Not an audio file (MP3, WAV, M4A, ...): {path.name}")

    size_bytes = path.stat().st_size
    if size_bytes > max_file_size_mb * 1024 * 1024:
        raise ValidationError(
            f"File is {format_file_size(size_bytes)}, larger than the {max_file_size_mb} MB limit"
        )

    return {
        "path": str(path),
        "size_bytes": size_bytes,
        "size": format_file_size(size_bytes),
    }


def load_waveform(path: Path, max_file_size_mb: int = 50, validate: bool = True) -> WaveformInput:
    """Decode an audio file into a WaveformInput.

    Keeps the native sample rate and the first channel only.

    Args:
        path: Path to audio file
        max_file_size_mb: Largest accepted file size in megabytes
        validate: Run validate_audio_file first; pass False if the caller already did

    Returns:
        WaveformInput with samples, sample rate and true duration

    Raises:
        ValidationError: If the file fails validation
        AudioLoadError: If decoding fails or yields no audio
    """
    import librosa

    if validate:
        validate_audio_file(path, max_file_size_mb)

    logger.debug("Decoding %s", path)

    try:
        audio, sr = librosa.load(str(path), sr=None, mono=False)
    except Exception as e:
        raise AudioLoadError(str(path), f"Failed to decode audio: {e}") from e

    channel = audio[0] if audio.ndim > 1 else audio
    if len(channel) == 0 or not sr:
        raise AudioLoadError(str(path), "Decoded audio contains no samples")

    duration = len(channel) / sr
    logger.debug(
        "Decoded %s: %d samples, %d Hz, %d channel(s), %.2fs",
        path.name,
        len(channel),
        sr,
        audio.shape[0] if audio.ndim > 1 else 1,
        duration,
    )

    try:
        return WaveformInput(samples=channel, sample_rate=int(sr), duration=duration)
    except PydanticValidationError as e:
        raise AudioLoadError(str(path), f"Decoded audio is unusable: {e}") from e

"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import wave
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
import yaml

from tonescope.models import AudioFeatures, WaveformInput


@pytest.fixture
def make_waveform() -> Callable[..., WaveformInput]:
    """Build a WaveformInput; duration defaults to len(samples) / sample_rate."""

    def _make(samples, sample_rate: int = 8000, duration: float | None = None) -> WaveformInput:
        samples = np.asarray(samples, dtype=np.float64)
        if duration is None:
            duration = samples.shape[-1] / sample_rate
        return WaveformInput(samples=samples, sample_rate=sample_rate, duration=duration)

    return _make


@pytest.fixture
def silence(make_waveform) -> WaveformInput:
    """1000 zero samples at 8 kHz, reported as a one second recording."""
    return make_waveform(np.zeros(1000), sample_rate=8000, duration=1.0)


@pytest.fixture
def speech_like(make_waveform) -> WaveformInput:
    """Two seconds of a 220 Hz tone with amplitude modulation and light noise."""
    sr = 16000
    t = np.arange(sr * 2) / sr
    rng = np.random.default_rng(42)
    envelope = 0.5 + 0.4 * np.sin(2 * np.pi * 3 * t)
    samples = 0.3 * envelope * np.sin(2 * np.pi * 220 * t) + 0.01 * rng.standard_normal(len(t))
    return make_waveform(np.clip(samples, -1.0, 1.0), sample_rate=sr)


@pytest.fixture
def make_features() -> Callable[..., AudioFeatures]:
    """Build AudioFeatures with every feature zero unless overridden."""

    def _make(**overrides) -> AudioFeatures:
        values = {
            "rms": 0.0,
            "rms_variance": 0.0,
            "zcr": 0.0,
            "spectral_centroid": 0.0,
            "low_freq_ratio": 0.0,
            "high_freq_ratio": 0.0,
            "duration_analyzed": 1.0,
            "sample_rate": 8000,
            "samples_analyzed": 8000,
        }
        values.update(overrides)
        return AudioFeatures(**values)

    return _make


@pytest.fixture
def wav_file(tmp_path: Path) -> Path:
    """Write a one second 16-bit stereo WAV whose right channel is silent."""
    sr = 8000
    t = np.arange(sr) / sr
    left = (0.5 * np.sin(2 * np.pi * 440 * t) * 32767).astype(np.int16)
    right = np.zeros(sr, dtype=np.int16)
    frames = np.column_stack([left, right]).tobytes()

    path = tmp_path / "clip.wav"
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(2)
        wf.setsampwidth(2)
        wf.setframerate(sr)
        wf.writeframes(frames)
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a tonescope.yaml with a shorter window and custom thresholds."""
    path = tmp_path / "tonescope.yaml"
    config = {
        "max_window_seconds": 10.0,
        "centroid_frame_size": 512,
        "risk_thresholds": {"medium": 25, "high": 70},
    }
    with open(path, "w") as f:
        yaml.dump(config, f)
    return path

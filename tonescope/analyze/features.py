"""
tonescope.analyze.features - Waveform feature extraction.

Computes loudness, dispersion, zero-crossing rate and two spectral proxies
over a capped analysis window. Nothing here is frequency-domain: the
"spectral" features are positional energy bands and an amplitude-weighted
sample-index centroid.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from tonescope.exceptions import EmptyInputError
from tonescope.models import AudioFeatures, WaveformInput

logger = logging.getLogger(__name__)

DEFAULT_MAX_WINDOW_SECONDS = 30.0
DEFAULT_FRAME_SIZE = 1024
WINDOW_TOLERANCE = 1e-6


def analysis_window_length(
    total_samples: int,
    sample_rate: int,
    duration: float,
    max_window_seconds: float = DEFAULT_MAX_WINDOW_SECONDS,
) -> int:
    """Number of leading samples to analyze.

    Args:
        total_samples: Length of the sample buffer
        sample_rate: Samples per second
        duration: True source duration in seconds
        max_window_seconds: Upper bound on the analyzed span

    Returns:
        Window length, at least 1 for a non-empty buffer
    """
    # Tolerance absorbs float error when duration was derived as n / sample_rate.
    capped = math.floor(min(duration, max_window_seconds) * sample_rate + WINDOW_TOLERANCE)
    return max(1, min(total_samples, capped))


def zero_crossing_rate(window: np.ndarray) -> float:
    """Fraction of adjacent sample pairs whose product is strictly negative.

    Exact zeros never count as a crossing.
    """
    if len(window) < 2:
        return 0.0
    crossings = int(np.count_nonzero(window[:-1] * window[1:] < 0))
    return crossings / (len(window) - 1)


def energy_band_ratios(window: np.ndarray) -> tuple[float, float]:
    """Share of summed amplitude in the first and last positional thirds.

    The window is split by position, not frequency. Any remainder of an
    uneven split belongs to the last third.

    Returns:
        Tuple of (low_ratio, high_ratio); (0.0, 0.0) for silence
    """
    magnitudes = np.abs(window)
    third = len(magnitudes) // 3

    low = float(np.sum(magnitudes[:third]))
    mid = float(np.sum(magnitudes[third : 2 * third]))
    high = float(np.sum(magnitudes[2 * third :]))

    total = low + mid + high
    if total == 0:
        return 0.0, 0.0
    return low / total, high / total


def spectral_centroid_proxy(window: np.ndarray, frame_size: int = DEFAULT_FRAME_SIZE) -> float:
    """Amplitude-weighted mean sample index over the opening frame."""
    frame = np.abs(window[:frame_size])
    magnitude = float(np.sum(frame))
    if magnitude == 0:
        return 0.0
    return float(np.dot(np.arange(len(frame), dtype=np.float64), frame)) / magnitude


def extract_features(
    waveform: WaveformInput,
    max_window_seconds: float = DEFAULT_MAX_WINDOW_SECONDS,
    frame_size: int = DEFAULT_FRAME_SIZE,
) -> AudioFeatures:
    """Extract tone features from the opening window of a waveform.

    Args:
        waveform: Decoded mono samples with sample rate and true duration
        max_window_seconds: Longest span of audio to analyze
        frame_size: Samples used for the spectral centroid proxy

    Returns:
        AudioFeatures for the analyzed window

    Raises:
        EmptyInputError: If the waveform has no samples
    """
    samples = waveform.samples
    if len(samples) == 0:
        raise EmptyInputError("Waveform contains no samples")

    n = analysis_window_length(
        len(samples), waveform.sample_rate, waveform.duration, max_window_seconds
    )
    window = samples[:n]

    rms = float(np.sqrt(np.mean(window**2)))
    # Dispersion around the rms level, not around the sample mean.
    rms_variance = float(np.mean((window - rms) ** 2))
    low_ratio, high_ratio = energy_band_ratios(window)

    features = AudioFeatures(
        rms=rms,
        rms_variance=rms_variance,
        zcr=zero_crossing_rate(window),
        spectral_centroid=spectral_centroid_proxy(window, frame_size),
        low_freq_ratio=low_ratio,
        high_freq_ratio=high_ratio,
        duration_analyzed=n / waveform.sample_rate,
        sample_rate=waveform.sample_rate,
        samples_analyzed=n,
    )

    logger.debug(
        "Extracted features from %d/%d samples: rms=%.4f var=%.4f zcr=%.4f centroid=%.1f",
        n,
        len(samples),
        features.rms,
        features.rms_variance,
        features.zcr,
        features.spectral_centroid,
    )

    return features

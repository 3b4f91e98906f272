"""
tonescope.analyze.pipeline - Extract-then-score entry points.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from tonescope.analyze.features import extract_features
from tonescope.analyze.scoring import score_emotions
from tonescope.config import TonescopeConfig
from tonescope.models import EmotionResult, WaveformInput

logger = logging.getLogger(__name__)


def analyze_waveform(
    waveform: WaveformInput,
    config: TonescopeConfig | None = None,
    timestamp: datetime | None = None,
) -> EmotionResult:
    """Run feature extraction and scoring on a decoded waveform.

    Args:
        waveform: Decoded mono samples
        config: Window, frame and threshold settings; defaults if None
        timestamp: Optional capture time to attach to the result

    Returns:
        EmotionResult for the waveform

    Raises:
        EmptyInputError: If the waveform has no samples
    """
    config = config or TonescopeConfig()

    features = extract_features(
        waveform,
        max_window_seconds=config.max_window_seconds,
        frame_size=config.centroid_frame_size,
    )
    result = score_emotions(
        features,
        waveform.duration,
        timestamp=timestamp,
        thresholds=config.risk_thresholds,
    )

    logger.debug(
        "Scored %s: risk=%d (%s)",
        result.emotions.model_dump(),
        result.conflict_risk,
        result.risk_level.value,
    )
    return result


def analyze_file(
    path: Path, config: TonescopeConfig | None = None, validate: bool = True
) -> EmotionResult:
    """Decode an audio file and analyze it, stamped with the current time.

    Set ``validate=False`` when the file has already been through
    validate_audio_file.
    """
    from tonescope.extract.audio import load_waveform

    config = config or TonescopeConfig()
    waveform = load_waveform(path, max_file_size_mb=config.max_file_size_mb, validate=validate)
    return analyze_waveform(
        waveform,
        config=config,
        timestamp=datetime.now().replace(microsecond=0),
    )

"""
tonescope.analyze - Tone analysis core.

Stage 1: extract statistical features from a capped window of samples.
Stage 2: map the features to emotion percentages and a conflict-risk index.
Both stages are pure and keep no state between calls.
"""

from __future__ import annotations

from tonescope.analyze.features import extract_features
from tonescope.analyze.pipeline import analyze_file, analyze_waveform
from tonescope.analyze.scoring import score_emotions

__all__ = ["analyze_file", "analyze_waveform", "extract_features", "score_emotions"]

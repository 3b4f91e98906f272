"""
tonescope.analyze.scoring - Emotion scores and conflict risk.

Maps extracted features onto four bounded emotion scores, normalizes them to
percentages, and derives a weighted conflict-risk index. The multipliers are
fixed; changing any of them changes the published output.
"""

from __future__ import annotations

import math
from datetime import datetime

from tonescope.config import RiskThresholds
from tonescope.models import (
    EMOTION_NAMES,
    AudioFeatures,
    EmotionResult,
    EmotionScores,
    FeatureSummary,
    RiskLevel,
)

RISK_WEIGHTS = {
    "tense": 0.4,
    "angry": 0.6,
    "excited": 0.2,
}

# Every emotion gets an equal share when all raw scores are zero.
ZERO_TOTAL_SCORE = 25


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike round()."""
    return int(math.floor(value + 0.5))


def raw_emotion_scores(features: AudioFeatures) -> dict[str, float]:
    """Compute un-normalized emotion scores, each clamped to its bound."""
    return {
        "calm": max(0.0, 100 - features.rms_variance * 1000 - features.zcr * 500),
        "tense": min(100.0, features.zcr * 800 + features.rms_variance * 600),
        "angry": min(100.0, features.spectral_centroid * 50 + features.high_freq_ratio * 200),
        "excited": min(100.0, (features.rms_variance + features.zcr) * 400),
    }


def normalize_scores(raw: dict[str, float]) -> EmotionScores:
    """Convert raw scores to rounded percentages of their total.

    The rounded values are not adjusted to hit exactly 100.

    Args:
        raw: Raw score per emotion name

    Returns:
        EmotionScores; 25 each if the raw total is zero
    """
    total = sum(raw[name] for name in EMOTION_NAMES)
    if total == 0:
        return EmotionScores(**{name: ZERO_TOTAL_SCORE for name in EMOTION_NAMES})
    return EmotionScores(**{name: round_half_up(raw[name] / total * 100) for name in EMOTION_NAMES})


def compute_conflict_risk(emotions: EmotionScores) -> int:
    """Weighted combination of the normalized tense, angry and excited scores."""
    risk = sum(getattr(emotions, name) * weight for name, weight in RISK_WEIGHTS.items())
    return min(100, round_half_up(risk))


def classify_risk(risk: int, thresholds: RiskThresholds | None = None) -> RiskLevel:
    """Bucket a conflict-risk percentage into a RiskLevel."""
    thresholds = thresholds or RiskThresholds()
    if risk < thresholds.medium:
        return RiskLevel.LOW
    elif risk < thresholds.high:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def summarize_features(features: AudioFeatures) -> FeatureSummary:
    return FeatureSummary(
        volume=round_half_up(features.rms * 1000),
        variability=round_half_up(features.rms_variance * 1000),
        zero_crossing=round_half_up(features.zcr * 100),
    )


def score_emotions(
    features: AudioFeatures,
    duration: float,
    timestamp: datetime | None = None,
    thresholds: RiskThresholds | None = None,
) -> EmotionResult:
    """Score the emotional profile of a set of extracted features.

    Args:
        features: Output of extract_features
        duration: Recording duration in seconds, reported rounded to 2 places
        timestamp: Capture time supplied by the caller, passed through as-is
        thresholds: Risk level boundaries; defaults to 30/60

    Returns:
        EmotionResult
    """
    emotions = normalize_scores(raw_emotion_scores(features))
    risk = compute_conflict_risk(emotions)

    return EmotionResult(
        emotions=emotions,
        conflict_risk=risk,
        risk_level=classify_risk(risk, thresholds),
        dominant_emotion=emotions.dominant,
        duration_analyzed=round_half_up(duration * 100) / 100,
        features=summarize_features(features),
        timestamp=timestamp,
    )

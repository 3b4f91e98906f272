"""Tests for tonescope.analyze.scoring module."""

from __future__ import annotations

from datetime import datetime

import pytest

from tonescope.analyze.features import extract_features
from tonescope.analyze.scoring import (
    classify_risk,
    compute_conflict_risk,
    normalize_scores,
    raw_emotion_scores,
    round_half_up,
    score_emotions,
    summarize_features,
)
from tonescope.config import RiskThresholds
from tonescope.models import EmotionScores, RiskLevel


class TestRoundHalfUp:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self) -> None:
        assert round_half_up(1.49) == 1

    def test_integers_unchanged(self) -> None:
        assert round_half_up(30.0) == 30


class TestRawEmotionScores:
    def test_high_tension(self, make_features) -> None:
        raw = raw_emotion_scores(make_features(rms_variance=0.05, zcr=0.3))

        assert raw["calm"] == 0.0
        assert raw["tense"] == 100.0
        assert raw["angry"] == 0.0
        assert raw["excited"] == 100.0

    def test_silence_is_fully_calm(self, make_features) -> None:
        raw = raw_emotion_scores(make_features())

        assert raw == {"calm": 100.0, "tense": 0.0, "angry": 0.0, "excited": 0.0}

    def test_moderate_values(self, make_features) -> None:
        raw = raw_emotion_scores(
            make_features(rms_variance=0.01, zcr=0.05, spectral_centroid=0.5, high_freq_ratio=0.2)
        )

        assert raw["calm"] == pytest.approx(65.0)
        assert raw["tense"] == pytest.approx(46.0)
        assert raw["angry"] == pytest.approx(65.0)
        assert raw["excited"] == pytest.approx(24.0)

    def test_angry_is_capped(self, make_features) -> None:
        raw = raw_emotion_scores(make_features(spectral_centroid=511.5, high_freq_ratio=0.33))
        assert raw["angry"] == 100.0


class TestNormalizeScores:
    def test_normalizes_to_percentages(self) -> None:
        scores = normalize_scores({"calm": 0.0, "tense": 100.0, "angry": 0.0, "excited": 100.0})
        assert scores == EmotionScores(calm=0, tense=50, angry=0, excited=50)

    def test_zero_total_splits_evenly(self) -> None:
        scores = normalize_scores({"calm": 0.0, "tense": 0.0, "angry": 0.0, "excited": 0.0})
        assert scores == EmotionScores(calm=25, tense=25, angry=25, excited=25)

    def test_rounding_drift_is_kept(self) -> None:
        scores = normalize_scores({"calm": 1.0, "tense": 1.0, "angry": 1.0, "excited": 0.0})

        assert scores.calm == 33
        assert scores.total == 99

    def test_rounding_drift_upward(self) -> None:
        scores = normalize_scores({"calm": 12.5, "tense": 12.5, "angry": 37.5, "excited": 37.5})

        assert scores == EmotionScores(calm=13, tense=13, angry=38, excited=38)
        assert scores.total == 102

    def test_exact_split(self) -> None:
        scores = normalize_scores({"calm": 1.0, "tense": 1.0, "angry": 1.0, "excited": 1.0 / 3})

        assert scores.calm == 30
        assert scores.excited == 10
        assert scores.total == 100


class TestConflictRisk:
    def test_weights(self) -> None:
        assert compute_conflict_risk(EmotionScores(calm=0, tense=0, angry=100, excited=0)) == 60
        assert compute_conflict_risk(EmotionScores(calm=0, tense=100, angry=0, excited=0)) == 40
        assert compute_conflict_risk(EmotionScores(calm=0, tense=0, angry=0, excited=100)) == 20

    def test_calm_does_not_contribute(self) -> None:
        assert compute_conflict_risk(EmotionScores(calm=100, tense=0, angry=0, excited=0)) == 0

    def test_mixed(self) -> None:
        emotions = EmotionScores(calm=10, tense=25, angry=40, excited=25)
        # 10 + 24 + 5
        assert compute_conflict_risk(emotions) == 39


class TestClassifyRisk:
    def test_default_boundaries(self) -> None:
        assert classify_risk(0) == RiskLevel.LOW
        assert classify_risk(29) == RiskLevel.LOW
        assert classify_risk(30) == RiskLevel.MEDIUM
        assert classify_risk(59) == RiskLevel.MEDIUM
        assert classify_risk(60) == RiskLevel.HIGH
        assert classify_risk(100) == RiskLevel.HIGH

    def test_custom_thresholds(self) -> None:
        thresholds = RiskThresholds(medium=10, high=20)
        assert classify_risk(9, thresholds) == RiskLevel.LOW
        assert classify_risk(15, thresholds) == RiskLevel.MEDIUM
        assert classify_risk(20, thresholds) == RiskLevel.HIGH

    def test_levels_have_descriptions(self) -> None:
        for level in RiskLevel:
            assert level.description


class TestSummarizeFeatures:
    def test_display_scaling(self, make_features) -> None:
        summary = summarize_features(make_features(rms=0.0234, rms_variance=0.0042, zcr=0.123))

        assert summary.volume == 23
        assert summary.variability == 4
        assert summary.zero_crossing == 12


class TestScoreEmotions:
    def test_high_tension_scenario(self, make_features) -> None:
        result = score_emotions(make_features(rms_variance=0.05, zcr=0.3), duration=4.0)

        assert result.emotions == EmotionScores(calm=0, tense=50, angry=0, excited=50)
        assert result.conflict_risk == 30
        assert result.risk_level == RiskLevel.MEDIUM
        assert result.dominant_emotion == "tense"
        assert result.features.variability == 50
        assert result.features.zero_crossing == 30

    def test_silence_scenario(self, silence) -> None:
        result = score_emotions(extract_features(silence), duration=silence.duration)

        assert result.emotions == EmotionScores(calm=100, tense=0, angry=0, excited=0)
        assert result.conflict_risk == 0
        assert result.risk_level == RiskLevel.LOW
        assert result.dominant_emotion == "calm"
        assert result.features.volume == 0

    def test_duration_rounded_to_two_places(self, make_features) -> None:
        result = score_emotions(make_features(), duration=12.3456)
        assert result.duration_analyzed == 12.35

    def test_timestamp_passed_through(self, make_features) -> None:
        stamp = datetime(2026, 1, 2, 3, 4, 5)
        result = score_emotions(make_features(), duration=1.0, timestamp=stamp)
        assert result.timestamp == stamp

    def test_timestamp_defaults_to_none(self, make_features) -> None:
        assert score_emotions(make_features(), duration=1.0).timestamp is None

    def test_thresholds_applied(self, make_features) -> None:
        result = score_emotions(
            make_features(rms_variance=0.05, zcr=0.3),
            duration=1.0,
            thresholds=RiskThresholds(medium=10, high=25),
        )
        assert result.risk_level == RiskLevel.HIGH

    def test_bounds_and_sum(self, speech_like) -> None:
        result = score_emotions(extract_features(speech_like), duration=speech_like.duration)
        emotions = result.emotions

        for value in (emotions.calm, emotions.tense, emotions.angry, emotions.excited):
            assert 0 <= value <= 100
        assert 0 <= result.conflict_risk <= 100
        assert 98 <= emotions.total <= 102

    def test_serializes_with_published_keys(self, make_features) -> None:
        stamp = datetime(2026, 1, 2, 3, 4, 5)
        data = score_emotions(
            make_features(rms=0.1, rms_variance=0.05, zcr=0.3), duration=2.5, timestamp=stamp
        ).to_dict()

        assert data["emotions"] == {"calm": 0, "tense": 50, "angry": 0, "excited": 50}
        assert data["conflictRisk"] == 30
        assert data["riskLevel"] == "medium"
        assert data["dominantEmotion"] == "tense"
        assert data["durationAnalyzed"] == 2.5
        assert data["features"] == {"volume": 100, "variability": 50, "zeroCrossing": 30}
        assert data["timestamp"] == "2026-01-02T03:04:05"

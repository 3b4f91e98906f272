"""
tonescope.models - Value types passed between pipeline stages.

All models are frozen. Field names are snake_case in Python and serialize to
the camelCase keys of the published result format (``conflictRisk``,
``durationAnalyzed``, ``zeroCrossing``...) with ``model_dump(by_alias=True)``.

Note on naming: ``spectral_centroid``, ``low_freq_ratio`` and
``high_freq_ratio`` are NOT frequency-domain measurements. The centroid is an
amplitude-weighted sample index over the opening frame and the ratios compare
summed amplitude across three positional thirds of the window. Replacing them
with FFT-based values would change every emotion score.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMOTION_NAMES = ("calm", "tense", "angry", "excited")


class _ValueModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class WaveformInput(BaseModel):
    """Decoded single-channel PCM handed to the core by the caller."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    samples: np.ndarray
    sample_rate: int = Field(gt=0)
    duration: float = Field(gt=0.0)

    @field_validator("samples", mode="before")
    @classmethod
    def coerce_samples(cls, v: Any) -> np.ndarray:
        """Copy into a read-only float64 vector, keeping only the first channel."""
        arr = np.array(v, dtype=np.float64)
        if arr.ndim == 2:
            arr = np.ascontiguousarray(arr[0])
        elif arr.ndim != 1:
            raise ValueError("samples must be a 1-D array or a (channels, samples) array")
        if not np.all(np.isfinite(arr)):
            raise ValueError("samples must be finite (no NaN or infinity)")
        arr.setflags(write=False)
        return arr


class AudioFeatures(_ValueModel):
    """Statistical features of the analyzed window."""

    rms: float = Field(ge=0.0)
    rms_variance: float = Field(ge=0.0)
    zcr: float = Field(ge=0.0, le=1.0)
    spectral_centroid: float = Field(ge=0.0)
    low_freq_ratio: float = Field(ge=0.0, le=1.0)
    high_freq_ratio: float = Field(ge=0.0, le=1.0)
    duration_analyzed: float = Field(ge=0.0)
    sample_rate: int = Field(gt=0)
    samples_analyzed: int = Field(ge=0)


class EmotionScores(_ValueModel):
    """Normalized emotion percentages.

    The four values sum to 100 give or take rounding drift; they are never
    forced to an exact total.
    """

    calm: int = Field(ge=0, le=100)
    tense: int = Field(ge=0, le=100)
    angry: int = Field(ge=0, le=100)
    excited: int = Field(ge=0, le=100)

    @property
    def total(self) -> int:
        return self.calm + self.tense + self.angry + self.excited

    @property
    def dominant(self) -> str:
        """Name of the highest score; ties go to the earlier emotion."""
        values = [getattr(self, name) for name in EMOTION_NAMES]
        return EMOTION_NAMES[values.index(max(values))]


class FeatureSummary(_ValueModel):
    """Integer-scaled feature magnitudes for display."""

    volume: int
    variability: int
    zero_crossing: int


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def description(self) -> str:
        return _RISK_DESCRIPTIONS[self]


_RISK_DESCRIPTIONS = {
    RiskLevel.LOW: "Calm, steady tone; conflict is unlikely.",
    RiskLevel.MEDIUM: "Some tension detected; keep an eye on where the conversation goes.",
    RiskLevel.HIGH: "Strong negative tone detected; conflict risk is high and may need intervention.",
}


class EmotionResult(_ValueModel):
    """Emotional profile of one recording."""

    emotions: EmotionScores
    conflict_risk: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    dominant_emotion: str
    duration_analyzed: float
    features: FeatureSummary
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using the published camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

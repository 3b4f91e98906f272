"""
tonescope.extract - Audio decoding.

Validates audio files and decodes them with librosa into the WaveformInput
the analysis core consumes.
"""

from __future__ import annotations

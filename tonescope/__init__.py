"""
Tonescope - heuristic vocal tone profiling.

Turns a decoded waveform into a small emotional profile through a two-stage
pipeline: statistical feature extraction → emotion scoring and conflict
risk estimation.
"""

__version__ = "0.1.0"

"""Audio level metering helpers."""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from loudbars.config import DB_CEIL, DB_FLOOR


INT16_MAX = float(np.iinfo(np.int16).max)


def rms_level(chunk: np.ndarray) -> float:
    """Return root-mean-square amplitude in linear scale."""
    if chunk.size == 0:
        return 0.0
    samples = chunk.astype(np.float64) / INT16_MAX
    rms = np.sqrt(np.mean(np.square(samples)))
    return float(rms)


def to_decibels(rms: float, floor: float = DB_FLOOR) -> float:
    """Convert a linear RMS amplitude to dBFS, never below ``floor``."""
    if not math.isfinite(rms) or rms <= 0.0:
        return floor
    return max(20.0 * math.log10(rms), floor)


def normalize_db(db: float, floor: float = DB_FLOOR, ceil: float = DB_CEIL) -> float:
    """Map ``floor``..``ceil`` dB onto 0..1, clamped."""
    if not math.isfinite(db):
        return 0.0
    value = (db - floor) / (ceil - floor)
    return min(max(value, 0.0), 1.0)


def chunk_loudness(chunk: np.ndarray, floor: float = DB_FLOOR, ceil: float = DB_CEIL) -> float:
    """Return the normalised loudness of one chunk of int16 samples."""
    return normalize_db(to_decibels(rms_level(chunk), floor), floor, ceil)


def iter_chunks(samples: np.ndarray, chunk_size: int) -> Iterator[np.ndarray]:
    """Yield consecutive non-overlapping slices; the last may be shorter."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    for start in range(0, len(samples), chunk_size):
        yield samples[start : start + chunk_size]

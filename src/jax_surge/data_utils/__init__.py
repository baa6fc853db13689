"""Data utilities for training correction models on simulation output."""

from .normalization import (
    NormalizationStatistics,
    fit_and_apply,
    fit_statistics,
    apply,
    invert,
)

__all__ = [
    "NormalizationStatistics",
    "fit_and_apply",
    "fit_statistics",
    "apply",
    "invert",
]

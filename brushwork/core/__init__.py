"""Core value types and interval algebra."""

from .types import Place, LR, LMR, TB, TMB
from .interval import (
    Box1,
    Box2,
    lmr_of,
    tmb_of,
    n_to_bool,
    n_to_enum,
    n_to_range,
    n_to_box1,
    n_to_fitted_box1,
    open_ranges,
)

__all__ = [
    "Place",
    "LR",
    "LMR",
    "TB",
    "TMB",
    "Box1",
    "Box2",
    "lmr_of",
    "tmb_of",
    "n_to_bool",
    "n_to_enum",
    "n_to_range",
    "n_to_box1",
    "n_to_fitted_box1",
    "open_ranges",
]

"""Difficulty levels and the tuning values derived from them."""

from enum import Enum

from beartype import beartype


class Difficulty(Enum):
    """Game difficulty tiers."""

    EASY = "easy"
    NORMAL = "normal"
    REALISTIC = "realistic"


_STABILITY_ASSIST: dict[Difficulty, float] = {
    Difficulty.EASY: 0.7,
    Difficulty.NORMAL: 0.3,
    Difficulty.REALISTIC: 0.0,
}

_SCORE_MULTIPLIER: dict[Difficulty, float] = {
    Difficulty.EASY: 1.0,
    Difficulty.NORMAL: 1.5,
    Difficulty.REALISTIC: 2.0,
}


@beartype
def stability_assist_for(difficulty: Difficulty) -> float:
    """Stability assist strength in [0, 1] (0 = no assist)."""
    return _STABILITY_ASSIST[difficulty]


@beartype
def score_multiplier_for(difficulty: Difficulty) -> float:
    """Multiplier applied to every checkpoint score."""
    return _SCORE_MULTIPLIER[difficulty]

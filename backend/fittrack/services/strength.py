"""Strength metrics for one exercise performance.

The derivation works on any objects exposing `reps` and `weight`, so ORM
`ExerciseSet` rows and plain `SetEntry` values are interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from fittrack.core.constants import (
    BRZYCKI_DENOMINATOR_BASE,
    BRZYCKI_MAX_REPS,
    BRZYCKI_MIN_REPS,
    BRZYCKI_NUMERATOR,
)
from fittrack.core.errors import InvalidRepsError


class SetLike(Protocol):
    reps: int
    weight: float


class Ordered(Protocol):
    order: int


@dataclass(frozen=True, slots=True)
class SetEntry:
    order: int
    reps: int
    weight: float


@dataclass(frozen=True, slots=True)
class StrengthSummary:
    max_weight: float
    max_reps: int
    total_volume: float
    average_weight: float
    one_rep_max: float
    best_set: SetEntry | None


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Brzycki estimate: weight * 36 / (37 - reps).

    Raises:
        InvalidRepsError: reps outside 1..36, where the formula is undefined or negative.
    """
    if not BRZYCKI_MIN_REPS <= reps <= BRZYCKI_MAX_REPS:
        raise InvalidRepsError(
            f"reps must be between {BRZYCKI_MIN_REPS} and {BRZYCKI_MAX_REPS}, got {reps}"
        )
    return weight * BRZYCKI_NUMERATOR / (BRZYCKI_DENOMINATOR_BASE - reps)


def clamp_reps(reps: int, cap: int = BRZYCKI_MAX_REPS) -> int:
    return max(BRZYCKI_MIN_REPS, min(reps, cap, BRZYCKI_MAX_REPS))


def best_set(sets: Iterable[SetLike]) -> SetLike | None:
    """The set with the highest weight x reps; the earliest one wins ties."""
    best = None
    for s in sets:
        if best is None or s.weight * s.reps > best.weight * best.reps:
            best = s
    return best


def derive_strength(sets: Sequence[SetLike], rep_cap: int = BRZYCKI_MAX_REPS) -> StrengthSummary:
    if not sets:
        return StrengthSummary(0.0, 0, 0.0, 0.0, 0.0, None)

    top = best_set(sets)
    one_rep_max = estimate_one_rep_max(top.weight, clamp_reps(top.reps, rep_cap))
    return StrengthSummary(
        max_weight=max(s.weight for s in sets),
        max_reps=max(s.reps for s in sets),
        total_volume=sum(s.weight * s.reps for s in sets),
        average_weight=sum(s.weight for s in sets) / len(sets),
        one_rep_max=one_rep_max,
        best_set=SetEntry(order=getattr(top, "order", 0), reps=top.reps, weight=top.weight),
    )


def reindex(sets: Iterable[Ordered]) -> None:
    """Renumber sets densely from 0, keeping their relative order."""
    for position, s in enumerate(sorted(sets, key=lambda s: s.order)):
        s.order = position

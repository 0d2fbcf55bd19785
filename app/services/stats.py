"""
Descriptive statistics over a population of attempt scores.

Quartiles use the nearest-rank rule ``ceil(p * (n + 1)) - 1`` clamped to the
valid index range. That picks an existing score rather than interpolating,
so small populations give coarse but stable answers.
"""
import math
from dataclasses import dataclass
from typing import Sequence, Union

from app.core.errors import EmptyPopulation

Number = Union[int, float]


@dataclass(frozen=True)
class ScoreSummary:
    min: Number
    max: Number
    mean: float
    median: Number
    lower_quartile: Number
    upper_quartile: Number
    count: int


def nearest_rank_quartile(sorted_scores: Sequence[Number], percentile: float) -> Number:
    n = len(sorted_scores)
    index = math.ceil(percentile * (n + 1)) - 1
    index = max(0, min(index, n - 1))
    return sorted_scores[index]


def median(sorted_scores: Sequence[Number]) -> Number:
    n = len(sorted_scores)
    if n % 2 == 0:
        return (sorted_scores[n // 2 - 1] + sorted_scores[n // 2]) / 2
    return sorted_scores[n // 2]


def summarize(scores: Sequence[Number]) -> ScoreSummary:
    if not scores:
        raise EmptyPopulation("No results found for this quiz")

    sorted_scores = sorted(scores)
    count = len(sorted_scores)

    return ScoreSummary(
        min=sorted_scores[0],
        max=sorted_scores[-1],
        mean=sum(sorted_scores) / count,
        median=median(sorted_scores),
        lower_quartile=nearest_rank_quartile(sorted_scores, 0.25),
        upper_quartile=nearest_rank_quartile(sorted_scores, 0.75),
        count=count,
    )

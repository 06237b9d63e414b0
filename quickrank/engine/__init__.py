"""Core quickselect ranking engine."""

from .errors import InvalidRangeError, PlayerFileError, QuickRankError, RankingError
from .models import Player, RankedPlayer, StepKind, TraceStep, steps_for_rank
from .ranker import Ranker, RankingResult, rank_all
from .trace import TraceRecorder, count_kinds

__all__ = [
    "Ranker",
    "RankingResult",
    "rank_all",
    "TraceRecorder",
    "count_kinds",
    "Player",
    "RankedPlayer",
    "StepKind",
    "TraceStep",
    "steps_for_rank",
    "QuickRankError",
    "InvalidRangeError",
    "RankingError",
    "PlayerFileError",
]

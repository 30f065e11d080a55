"""Vote use cases."""

from .get_user_vote import GetUserVoteRequest, GetUserVoteResponse, GetUserVoteUseCase
from .purge_user_votes import (
    PurgeUserVotesRequest,
    PurgeUserVotesResponse,
    PurgeUserVotesUseCase,
)
from .reconcile_scores import (
    ReconcileScoresResponse,
    ReconcileScoresUseCase,
    ScoreCorrection,
)
from .submit_vote import SubmitVoteRequest, SubmitVoteResponse, SubmitVoteUseCase

__all__ = [
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
    "PurgeUserVotesRequest",
    "PurgeUserVotesResponse",
    "PurgeUserVotesUseCase",
    "ReconcileScoresResponse",
    "ReconcileScoresUseCase",
    "ScoreCorrection",
    "SubmitVoteRequest",
    "SubmitVoteResponse",
    "SubmitVoteUseCase",
]

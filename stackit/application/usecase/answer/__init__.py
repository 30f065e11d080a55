"""Answer use cases."""

from .accept_answer import AcceptAnswerRequest, AcceptAnswerResponse, AcceptAnswerUseCase
from .create_answer import CreateAnswerRequest, CreateAnswerResponse, CreateAnswerUseCase
from .delete_answer import DeleteAnswerRequest, DeleteAnswerUseCase
from .update_answer import UpdateAnswerRequest, UpdateAnswerResponse, UpdateAnswerUseCase

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerResponse",
    "AcceptAnswerUseCase",
    "CreateAnswerRequest",
    "CreateAnswerResponse",
    "CreateAnswerUseCase",
    "DeleteAnswerRequest",
    "DeleteAnswerUseCase",
    "UpdateAnswerRequest",
    "UpdateAnswerResponse",
    "UpdateAnswerUseCase",
]

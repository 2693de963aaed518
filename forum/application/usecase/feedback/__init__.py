"""Feedback use cases."""

from .create_feedback import CreateFeedbackRequest, CreateFeedbackUseCase
from .delete_feedback import (
    DeleteFeedbackRequest,
    DeleteFeedbackResponse,
    DeleteFeedbackUseCase,
)
from .list_feedback import (
    GetFeedbackRequest,
    GetFeedbackUseCase,
    ListFeedbackRequest,
    ListFeedbackUseCase,
    ListUserFeedbackRequest,
    ListUserFeedbackUseCase,
)

__all__ = [
    "CreateFeedbackRequest",
    "CreateFeedbackUseCase",
    "DeleteFeedbackRequest",
    "DeleteFeedbackResponse",
    "DeleteFeedbackUseCase",
    "GetFeedbackRequest",
    "GetFeedbackUseCase",
    "ListFeedbackRequest",
    "ListFeedbackUseCase",
    "ListUserFeedbackRequest",
    "ListUserFeedbackUseCase",
]

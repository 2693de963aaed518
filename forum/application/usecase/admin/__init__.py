"""Admin use cases."""

from .manage_users import (
    DashboardStats,
    DashboardStatsRequest,
    DashboardStatsUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    ToggleBanRequest,
    ToggleBanUseCase,
    UserPage,
)
from .moderate_posts import (
    AdminDeletePostUseCase,
    ModeratePostRequest,
    ToggleLockUseCase,
    TogglePinUseCase,
)

__all__ = [
    "AdminDeletePostUseCase",
    "DashboardStats",
    "DashboardStatsRequest",
    "DashboardStatsUseCase",
    "ListUsersRequest",
    "ListUsersUseCase",
    "ModeratePostRequest",
    "ToggleBanRequest",
    "ToggleBanUseCase",
    "ToggleLockUseCase",
    "TogglePinUseCase",
    "UserPage",
]

"""Admin user management use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import PagedRequest, UserView, require_admin
from forum.domain.service import PostService, PrefixSearchService, UserService
from forum.domain.value import Pagination, UserId


class ToggleBanRequest(BaseModel):
    target_user_id: str
    user_id: str  # User ID from authenticated admin


class ListUsersRequest(PagedRequest):
    user_id: str  # User ID from authenticated admin


class UserPage(BaseModel):
    users: list[UserView]
    pagination: Pagination


class DashboardStatsRequest(BaseModel):
    user_id: str  # User ID from authenticated admin


class DashboardStats(BaseModel):
    total_users: int
    active_users: int
    banned_users: int
    admin_users: int
    total_posts: int
    search_index_ready: bool


class ToggleBanUseCase:
    """Use case for banning a user or lifting their ban."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ToggleBanRequest) -> UserView:
        """Execute toggle ban flow.

        Raises:
            AdminRequiredError: If the requester is not an admin
            NotFoundError: If the target doesn't exist
            BusinessRuleViolationError: If the target is an admin
        """
        await require_admin(self.user_service, request.user_id)
        user = await self.user_service.toggle_ban(
            UserId(UUID(request.target_user_id))
        )
        return UserView.from_user(user)


class ListUsersUseCase:
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ListUsersRequest) -> UserPage:
        await require_admin(self.user_service, request.user_id)
        page = request.page_request
        users, total = await self.user_service.list_users(page)
        return UserPage(
            users=[UserView.from_user(u) for u in users],
            pagination=Pagination.of(page, total),
        )


class DashboardStatsUseCase:
    """Use case for the head counts shown on the admin dashboard."""

    def __init__(
        self,
        user_service: UserService,
        post_service: PostService,
        search_service: PrefixSearchService,
    ) -> None:
        self.user_service = user_service
        self.post_service = post_service
        self.search_service = search_service

    async def execute(self, request: DashboardStatsRequest) -> DashboardStats:
        await require_admin(self.user_service, request.user_id)
        users = await self.user_service.get_user_stats()
        return DashboardStats(
            total_users=users.total,
            active_users=users.active,
            banned_users=users.banned,
            admin_users=users.admins,
            total_posts=await self.post_service.count_posts(),
            search_index_ready=self.search_service.state.ready,
        )

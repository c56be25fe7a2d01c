"""
Posts module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import CreatePostRequest, LikeResult, NewPost, Post, PostListResponse


@runtime_checkable
class IPostStore(Protocol):
    """
    Interface for post persistence.

    Like toggling must be atomic per (post, user): a post's counter always
    equals the number of users currently liking it.
    """

    def create(self, post: NewPost) -> Post:
        ...

    def get(self, post_id: str) -> Optional[Post]:
        ...

    def list_page(self, offset: int, limit: int, author_id: Optional[str] = None) -> list[Post]:
        """Posts newest first, optionally only one author's."""
        ...

    def count(self, author_id: Optional[str] = None) -> int:
        ...

    def delete(self, post_id: str) -> bool:
        """Remove a post and its likes. Returns False if it did not exist."""
        ...

    def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        """
        Like the post if the user has not, otherwise remove the like.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        ...


@runtime_checkable
class IPostService(Protocol):
    """Interface for the campus feed."""

    async def create_post(self, author: AuthenticatedUser, request: CreatePostRequest) -> Post:
        """
        Raises:
            InvalidPostContentError: If content is blank or too long
        """
        ...

    async def list_feed(self, page: int = 1, page_size: Optional[int] = None) -> PostListResponse:
        ...

    async def list_user_posts(
        self,
        user_id: str,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PostListResponse:
        ...

    async def delete_post(self, post_id: str, user_id: str) -> None:
        """
        Raises:
            PostNotFoundError: If the post does not exist
            PostAccessDeniedError: If the user is not the author
        """
        ...

    async def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        ...

"""
Campus feed service.
"""

import logging
import math
from typing import Optional

from shared.models import AuthenticatedUser
from modules.accounts.interfaces import IAccountStore

from .exceptions import InvalidPostContentError, PostAccessDeniedError, PostNotFoundError
from .interfaces import IPostService, IPostStore
from .models import CreatePostRequest, LikeResult, NewPost, Post, PostListResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
UNKNOWN_AUTHOR = "Unknown User"


class PostService(IPostService):
    """
    Implementation of the campus feed.

    Authorship is checked here; the stores never check ownership.
    """

    def __init__(
        self,
        posts: IPostStore,
        accounts: IAccountStore,
        max_length: int = 5000,
        default_page_size: int = 10,
    ):
        self._posts = posts
        self._accounts = accounts
        self._max_length = max_length
        self._default_page_size = default_page_size

    async def create_post(self, author: AuthenticatedUser, request: CreatePostRequest) -> Post:
        content = request.content.strip()
        if not content:
            raise InvalidPostContentError("Post content is required", self._max_length)
        if len(content) > self._max_length:
            raise InvalidPostContentError(
                f"Post content is too long (max {self._max_length} characters)",
                self._max_length,
            )

        # Display name is copied so the feed does not need a join
        account = self._accounts.find_by_id(author.id)
        author_name = account.full_name if account else UNKNOWN_AUTHOR

        post = self._posts.create(NewPost(author_id=author.id, author_name=author_name, content=content))
        logger.info(f"Account {author.id} created post {post.id}")
        return post

    async def list_feed(self, page: int = 1, page_size: Optional[int] = None) -> PostListResponse:
        return self._paginate(page, page_size)

    async def list_user_posts(
        self,
        user_id: str,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PostListResponse:
        return self._paginate(page, page_size, author_id=user_id)

    async def delete_post(self, post_id: str, user_id: str) -> None:
        post = self._posts.get(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        if post.author_id != user_id:
            raise PostAccessDeniedError(post_id, user_id)
        if not self._posts.delete(post_id):
            raise PostNotFoundError(post_id)
        logger.info(f"Account {user_id} deleted post {post_id}")

    async def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        result = self._posts.toggle_like(post_id, user_id)
        logger.debug(f"Account {user_id} {'liked' if result.liked else 'unliked'} post {post_id}")
        return result

    def _paginate(
        self,
        page: int,
        page_size: Optional[int],
        author_id: Optional[str] = None,
    ) -> PostListResponse:
        page = max(page, 1)
        page_size = min(max(page_size or self._default_page_size, 1), MAX_PAGE_SIZE)
        offset = (page - 1) * page_size

        posts = self._posts.list_page(offset, page_size, author_id=author_id)
        total = self._posts.count(author_id=author_id)

        return PostListResponse(
            posts=posts,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size) if total else 0,
            has_more=offset + len(posts) < total,
        )

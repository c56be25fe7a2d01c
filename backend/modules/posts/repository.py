"""
Supabase post store.

Backed by the `posts` and `post_likes` tables (see
migrations/002_create_posts.sql). Like toggling runs inside the
`toggle_post_like` database function so the like row and the counter
change in one transaction.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .exceptions import PostNotFoundError
from .interfaces import IPostStore
from .models import LikeResult, NewPost, Post

TABLE = "posts"


class SupabasePostStore(BaseRepository[Post], IPostStore):
    """
    Post store backed by Supabase Postgres.

    Note: This store does NOT perform authorization checks.
    The service layer is responsible for verifying authorship.
    """

    def create(self, post: NewPost) -> Post:
        result = self._execute("create post", self._db.table(TABLE).insert(post.model_dump()))
        return self._map_to_post(result.data[0])

    def get(self, post_id: str) -> Optional[Post]:
        result = self._execute(
            "get post",
            self._db.table(TABLE).select("*").eq("id", post_id).limit(1),
            on_no_data=lambda: PostNotFoundError(post_id),
        )
        if not result.data:
            return None
        return self._map_to_post(result.data[0])

    def list_page(self, offset: int, limit: int, author_id: Optional[str] = None) -> list[Post]:
        query = self._db.table(TABLE).select("*")
        if author_id is not None:
            query = query.eq("author_id", author_id)
        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)
        result = self._execute("list posts", query)
        return [self._map_to_post(row) for row in result.data]

    def count(self, author_id: Optional[str] = None) -> int:
        query = self._db.table(TABLE).select("id", count="exact")
        if author_id is not None:
            query = query.eq("author_id", author_id)
        result = self._execute("count posts", query)
        return result.count or 0

    def delete(self, post_id: str) -> bool:
        # post_likes rows go with it via ON DELETE CASCADE
        result = self._execute(
            "delete post",
            self._db.table(TABLE).delete().eq("id", post_id),
            on_no_data=lambda: PostNotFoundError(post_id),
        )
        return bool(result.data)

    def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        result = self._execute(
            "toggle like",
            self._db.rpc("toggle_post_like", {"p_post_id": post_id, "p_user_id": user_id}),
            on_no_data=lambda: PostNotFoundError(post_id),
        )
        row = result.data[0] if isinstance(result.data, list) else result.data
        if not row:
            raise PostNotFoundError(post_id)
        return LikeResult(post_id=post_id, liked=bool(row["liked"]), likes_count=int(row["likes_count"]))

    def _map_to_post(self, data: dict[str, Any]) -> Post:
        """Map database row to Post model."""
        return Post(
            id=str(data["id"]),
            author_id=str(data["author_id"]),
            author_name=data["author_name"],
            content=data["content"],
            likes_count=data.get("likes_count") or 0,
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )

"""
In-memory post store.

Posts and likes share one lock, so a toggle reads and writes the like set
and the counter in a single critical section.
"""

import threading
import uuid
from typing import Optional

from shared.clock import Clock, utcnow

from .exceptions import PostNotFoundError
from .interfaces import IPostStore
from .models import LikeResult, NewPost, Post


class InMemoryPostStore(IPostStore):
    """Post store for development and tests. Data is lost on restart."""

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._posts: dict[str, Post] = {}
        self._likes: dict[str, set[str]] = {}
        self._sequence = 0
        self._order: dict[str, int] = {}

    def create(self, post: NewPost) -> Post:
        now = self._clock()
        with self._lock:
            record = Post(id=str(uuid.uuid4()), created_at=now, updated_at=now, **post.model_dump())
            self._posts[record.id] = record
            self._likes[record.id] = set()
            self._sequence += 1
            self._order[record.id] = self._sequence
        return record.model_copy()

    def get(self, post_id: str) -> Optional[Post]:
        with self._lock:
            post = self._posts.get(post_id)
            return post.model_copy() if post else None

    def list_page(self, offset: int, limit: int, author_id: Optional[str] = None) -> list[Post]:
        with self._lock:
            posts = [p for p in self._posts.values() if author_id is None or p.author_id == author_id]
            # Insertion order breaks ties between posts created in the same instant
            posts.sort(key=lambda p: (p.created_at, self._order[p.id]), reverse=True)
            return [p.model_copy() for p in posts[offset:offset + limit]]

    def count(self, author_id: Optional[str] = None) -> int:
        with self._lock:
            if author_id is None:
                return len(self._posts)
            return sum(1 for p in self._posts.values() if p.author_id == author_id)

    def delete(self, post_id: str) -> bool:
        with self._lock:
            if self._posts.pop(post_id, None) is None:
                return False
            self._likes.pop(post_id, None)
            self._order.pop(post_id, None)
            return True

    def toggle_like(self, post_id: str, user_id: str) -> LikeResult:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                raise PostNotFoundError(post_id)
            likers = self._likes[post_id]
            if user_id in likers:
                likers.discard(user_id)
                liked = False
            else:
                likers.add(user_id)
                liked = True
            self._posts[post_id] = post.model_copy(update={"likes_count": len(likers)})
            return LikeResult(post_id=post_id, liked=liked, likes_count=len(likers))

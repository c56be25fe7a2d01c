"""
Posts module.

The campus feed: short text posts with likes.

Public API:
- IPostService: Interface for feed operations
- IPostStore: Interface for post persistence
- PostService, InMemoryPostStore, SupabasePostStore: Implementations
"""

from .interfaces import IPostService, IPostStore
from .models import CreatePostRequest, LikeResult, NewPost, Post, PostListResponse
from .exceptions import InvalidPostContentError, PostAccessDeniedError, PostNotFoundError
from .memory_store import InMemoryPostStore
from .repository import SupabasePostStore
from .service import PostService

__all__ = [
    "IPostService",
    "IPostStore",
    "PostService",
    "InMemoryPostStore",
    "SupabasePostStore",
    "CreatePostRequest",
    "LikeResult",
    "NewPost",
    "Post",
    "PostListResponse",
    "InvalidPostContentError",
    "PostAccessDeniedError",
    "PostNotFoundError",
]

"""
Posts module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    """Request body for creating a post. Length rules are enforced by the service."""

    content: str = Field(default="", description="Post text")


class NewPost(BaseModel):
    """Fields supplied when storing a post. The store assigns id and timestamps."""

    author_id: str
    author_name: str
    content: str


class Post(BaseModel):
    """A post in the campus feed."""

    id: str = Field(..., description="Post ID")
    author_id: str = Field(..., description="Account ID of the author")
    author_name: str = Field(..., description="Author display name at posting time")
    content: str = Field(..., description="Post text")
    likes_count: int = Field(default=0, ge=0, description="Number of likes")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class PostListResponse(BaseModel):
    """Paginated list of posts, newest first."""

    posts: list[Post] = Field(..., description="Post items")
    total: int = Field(..., description="Total count")
    page: int = Field(..., description="Current page")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")
    has_more: bool = Field(..., description="Whether more pages exist")


class LikeResult(BaseModel):
    """State of a post's like after a toggle."""

    post_id: str
    liked: bool = Field(..., description="Whether the caller now likes the post")
    likes_count: int = Field(..., ge=0)

"""
Campus feed API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_post_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IPostService
from .models import CreatePostRequest, LikeResult, Post, PostListResponse

router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: Optional[int] = Query(default=None, ge=1, le=100, description="Items per page"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> PostListResponse:
    """
    List the campus feed.

    Returns paginated results, most recent first.
    """
    return await service.list_feed(page, page_size)


@router.post("", response_model=Post, status_code=201)
async def create_post(
    request: CreatePostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> Post:
    """Publish a post as the current user."""
    return await service.create_post(user, request)


@router.get("/user/{user_id}", response_model=PostListResponse)
async def list_user_posts(
    user_id: str,
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: Optional[int] = Query(default=None, ge=1, le=100, description="Items per page"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> PostListResponse:
    """List one user's posts, most recent first."""
    return await service.list_user_posts(user_id, page, page_size)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> Response:
    """
    Delete a post.

    Only the author can delete a post.
    """
    await service.delete_post(post_id, user.id)
    return Response(status_code=204)


@router.post("/{post_id}/like", response_model=LikeResult)
async def toggle_like(
    post_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> LikeResult:
    """Like the post, or remove the like if the user already likes it."""
    return await service.toggle_like(post_id, user.id)

"""
Posts module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class PostNotFoundError(NotFoundError):
    """Raised when a post is not found."""

    def __init__(self, post_id: str):
        super().__init__(
            f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
            details={"post_id": post_id},
        )


class PostAccessDeniedError(AuthorizationError):
    """Raised when a user tries to modify someone else's post."""

    def __init__(self, post_id: str, user_id: str):
        super().__init__(
            f"Access denied to post: {post_id}",
            code="POST_ACCESS_DENIED",
            details={"post_id": post_id, "user_id": user_id},
        )


class InvalidPostContentError(ValidationError):
    """Raised when post content is empty or too long."""

    def __init__(self, message: str, max_length: int):
        super().__init__(
            message,
            code="INVALID_POST_CONTENT",
            details={"max_length": max_length},
        )

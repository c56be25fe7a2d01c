"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from session token claims and made available
    to route handlers via dependency injection.
    """

    id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Account email address")
    email_verified: bool = Field(default=False, description="Whether email was verified when the session was issued")

    issued_at: Optional[datetime] = Field(None, description="Session issue time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

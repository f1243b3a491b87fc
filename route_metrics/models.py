"""
Pydantic Models for Response Validation

Author: Development Team
Version: 1.0.0
"""

from typing import Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Service status")


class UserResponse(BaseModel):
    """Response model for a single user."""

    id: int = Field(..., description="User identifier")
    name: str = Field(..., description="Display name")
    email: Optional[str] = Field(default=None, description="Contact email")


class ErrorResponse(BaseModel):
    """Consistent error body."""

    error: str = Field(..., description="Error title")
    detail: str = Field(..., description="Error detail")

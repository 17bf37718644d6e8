from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=200)
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None


class JobUpdateRequest(JobCreateRequest):
    """
    Schema for updating a job (full replacement).

    updated_at defaults to the time of the update when omitted.
    """
    is_applied: bool = False
    updated_at: Optional[datetime] = None


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    user_id: int
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    is_applied: bool
    posted_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models

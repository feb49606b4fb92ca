"""User Profile domain model"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class UserProfileBase(BaseModel):
    """Base user profile fields"""
    birth_date: Optional[date] = None


class UserProfileCreate(UserProfileBase):
    """User profile creation model"""
    user_id: str  # UUID as string


class UserProfileUpdate(UserProfileBase):
    """User profile update model"""
    updated_at: Optional[datetime] = None


class UserProfile(UserProfileBase):
    """Complete user profile model from database"""
    id: str  # UUID as string
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

from datetime import date
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.errors import to_http_exception
from app.dependencies import CurrentUserId, UserProfileServiceDep
from app.models.user import UserProfile
from app.utils.date_utils import calculate_life_days, get_today_date_string

router = APIRouter(prefix="/api/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    profile: Optional[UserProfile] = None
    days_since_birth: Optional[int] = None


class UpdateProfileRequest(BaseModel):
    birth_date: Optional[date] = None


def _build_response(profile: Optional[UserProfile]) -> ProfileResponse:
    days = None
    if profile is not None:
        days = calculate_life_days(get_today_date_string(), profile.birth_date)
    return ProfileResponse(profile=profile, days_since_birth=days)


@router.get("", response_model=ProfileResponse)
async def get_profile(user_id: CurrentUserId, profiles: UserProfileServiceDep):
    """The user's profile and today's life-day number, if a birth date is set"""
    try:
        profile = await profiles.get_profile(user_id)
    except Exception as e:
        raise to_http_exception(e)
    return _build_response(profile)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    user_id: CurrentUserId,
    profiles: UserProfileServiceDep,
):
    try:
        profile = await profiles.update_birth_date(user_id, request.birth_date)
    except Exception as e:
        raise to_http_exception(e)
    return _build_response(profile)


@router.get("/life-day/{date_string}")
async def get_life_day(date_string: str, user_id: CurrentUserId, profiles: UserProfileServiceDep):
    """Life-day label for a date heading; falls back to the date itself"""
    try:
        life_day = await profiles.get_life_day(user_id, date_string)
    except Exception as e:
        raise to_http_exception(e)
    return {
        "date": date_string,
        "life_day": life_day,
        "label": str(life_day) if life_day else date_string,
    }

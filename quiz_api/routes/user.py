"""Current user routes."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from quiz_api.core.config import settings
from quiz_api.core.security import get_current_principal
from quiz_api.services.membership import (
    GroupMembershipProvider,
    get_membership_provider,
    is_member,
)


router = APIRouter(prefix="/api/user", tags=["User"])


class UserResponse(BaseModel):
    user: str
    is_in_quiz_contributers: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


@router.get("", response_model=UserResponse, name="GetCurrentUser")
def get_current_user(
    principal: str = Depends(get_current_principal),
    provider: GroupMembershipProvider = Depends(get_membership_provider),
):
    """
    Get the authenticated user and whether they may contribute questions.

    Protected endpoint - requires an authenticated principal.
    """
    return UserResponse(
        user=principal,
        is_in_quiz_contributers=is_member(provider, principal, settings.CONTRIBUTOR_GROUP),
    )

"""
Page access endpoints for the dashboard front end
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from beloved.core.dependencies import get_optional_user, get_current_user
from beloved.core.guards import resolve_page_access, dashboard_path_for, normalize_path
from beloved.models.profile import Profile
from beloved.schemas.pages import PageAccessResponse, DashboardResponse

router = APIRouter()


@router.get("/access", response_model=PageAccessResponse)
async def check_page_access(
    path: str = Query(..., min_length=1),
    current_user: Optional[Profile] = Depends(get_optional_user),
):
    """Whether the caller may open a page, or where to redirect them"""
    access = resolve_page_access(path, current_user)
    return PageAccessResponse(
        path=normalize_path(path),
        allowed=access.allowed,
        redirect_to=access.redirect_to,
        reason=access.reason,
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(current_user: Profile = Depends(get_current_user)):
    """Dashboard for the caller's role"""
    return DashboardResponse(redirect_to=dashboard_path_for(current_user.user_role))

"""
Page access schemas
"""
from typing import Optional
from pydantic import BaseModel


class PageAccessResponse(BaseModel):
    """Whether the caller may open a page, or where to go instead"""
    path: str
    allowed: bool
    redirect_to: Optional[str] = None
    reason: Optional[str] = None


class DashboardResponse(BaseModel):
    """Dashboard the caller lands on"""
    redirect_to: str

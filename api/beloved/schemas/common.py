"""
Shared schema pieces
"""
from pydantic import BaseModel


class Address(BaseModel):
    """Street address stored as JSON on profiles and rides"""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

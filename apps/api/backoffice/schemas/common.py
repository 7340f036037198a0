"""
Response envelope shared by every endpoint.
"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{success, data}`` on success, ``{success: false, error}`` otherwise."""
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None


class StatusMessage(BaseModel):
    status: str


def ok(data=None) -> dict:
    return {"success": True, "data": data}


def fail(message: str) -> dict:
    return {"success": False, "error": message}

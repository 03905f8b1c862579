"""Uniform success envelopes: ``{success, data, message?}`` and a bare ``{success}``."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse(SuccessResponse, Generic[T]):
    data: T
    message: Optional[str] = None

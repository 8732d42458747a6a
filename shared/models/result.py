"""Typed outcome returned by every access-layer operation."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    # required field missing, nothing was sent to the store
    VALIDATION = "validation"
    # the store answered with a non-success response
    STORE = "store"
    # anything else, coerced to its string form
    UNEXPECTED = "unexpected"


class OperationResult(BaseModel, Generic[T]):
    """Either data or an error message, never both."""

    data: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T | None = None) -> "OperationResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "OperationResult[T]":
        return cls(error=message, error_kind=kind)

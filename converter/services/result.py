"""Discriminated result type returned across the repository boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP = "http"
    DECODE = "decode"
    MAPPING = "mapping"
    SOURCE = "source"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    date: str | None = None

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    kind: FailureKind
    detail: str = ""
    status_code: int | None = None

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Ok[T], Err]

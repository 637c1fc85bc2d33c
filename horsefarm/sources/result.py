"""Adapter return type that records which path produced the data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, Optional, TypeVar

T = TypeVar("T")

Origin = Literal["live", "fallback"]

NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class SourceResult(Generic[T]):
    data: T
    origin: Origin = "live"
    reason: Optional[str] = None

    @classmethod
    def live(cls, data: T) -> "SourceResult[T]":
        return cls(data=data, origin="live")

    @classmethod
    def fallback(cls, data: T, reason: str) -> "SourceResult[T]":
        return cls(data=data, origin="fallback", reason=reason)

    @property
    def is_fallback(self) -> bool:
        return self.origin == "fallback"

"""Explicit success/failure results returned by provider adapters.

Provider calls never raise into the fetcher pipeline. Each call returns either
``Success(value)`` or ``Failure(FetchError)`` and the fetcher decides whether to
use the value or fall back to mock data.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Literal, TypeVar, Union

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorKind = Literal["unconfigured", "unhealthy", "timeout", "http_status", "network", "malformed"]


@dataclass(frozen=True, slots=True)
class FetchError:
    """Why a provider call produced no usable data."""

    kind: ErrorKind
    message: str
    provider: str = ""
    status_code: int | None = None

    def __str__(self) -> str:
        prefix = f"{self.provider}: " if self.provider else ""
        if self.status_code is not None:
            return f"{prefix}HTTP {self.status_code} ({self.kind}) {self.message}".rstrip()
        return f"{prefix}{self.kind}: {self.message}"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: FetchError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]


def classify_exception(provider: str, exc: BaseException) -> FetchError:
    """Map transport and parsing exceptions onto a ``FetchError``."""

    if isinstance(exc, httpx.TimeoutException):
        return FetchError("timeout", str(exc) or "request timed out", provider)
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code if exc.response is not None else None
        return FetchError("http_status", exc.response.reason_phrase if exc.response is not None else "", provider, status)
    if isinstance(exc, httpx.HTTPError):
        return FetchError("network", str(exc) or type(exc).__name__, provider)
    return FetchError("malformed", f"{type(exc).__name__}: {exc}", provider)


async def capture(provider: str, call: Callable[[], Awaitable[T]]) -> Result[T]:
    """Run ``call`` and convert expected provider errors into a ``Failure``."""

    try:
        return Success(await call())
    except (httpx.HTTPError, ValueError, KeyError, TypeError, IndexError) as exc:
        error = classify_exception(provider, exc)
        logger.warning("Provider call failed: %s", error)
        return Failure(error)

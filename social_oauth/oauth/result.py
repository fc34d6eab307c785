"""Success/failure value returned by the typed provider calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import OAuthProviderError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OAuthResult(Generic[T]):
    """Outcome of a token exchange or profile fetch.

    Exactly one of ``value`` and ``error`` is meaningful: a result is
    successful when ``error`` is None.
    """

    value: T | None = None
    error: OAuthProviderError | None = None

    @classmethod
    def success(cls, value: T) -> OAuthResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: OAuthProviderError) -> OAuthResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]

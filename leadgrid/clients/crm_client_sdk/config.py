from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:3000/"


@dataclass(frozen=True)
class SDKConfig:
    """Connection settings for the CRM store.

    Environment handling lives in the application config; this object only
    carries already-resolved values. One attempt per request unless told
    otherwise.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 1
    retry_backoff_ms: int = 150

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        object.__setattr__(self, "retry_max_attempts", max(1, self.retry_max_attempts))
        object.__setattr__(self, "retry_backoff_ms", max(0, self.retry_backoff_ms))


def normalize_base_url(value: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized if normalized.endswith("/") else f"{normalized}/"

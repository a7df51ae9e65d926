"""
Universal Adapter Framework.

Every external API integration inherits from AdapterBase. Provides:
- Header-based auth (API key / access token, custom headers)
- Bounded per-request timeout
- Health tracking (latency, errors, auth failures)
- Standardized request/response envelope

Requests are made once: a timeout or transport failure comes back as an
error envelope instead of being retried.
"""
from __future__ import annotations
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
import logging
import time

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class AuthType(str, Enum):
    NONE = "none"
    API_KEY = "api_key"
    CUSTOM = "custom"


@dataclass
class AuthCredentials:
    """Credentials for an adapter."""
    adapter_name: str
    auth_type: AuthType = AuthType.NONE
    api_key: str | None = None
    api_key_header: str = "Authorization"
    api_key_prefix: str = "Bearer"
    custom_headers: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Request / Response envelope
# ---------------------------------------------------------------------------

@dataclass
class AdapterRequest:
    """Standardized outbound request."""
    method: str  # GET, POST, PUT, PATCH, DELETE
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None


@dataclass
class AdapterResponse:
    """Standardized inbound response."""
    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    latency_ms: float = 0.0
    adapter_name: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status_code < 300


# ---------------------------------------------------------------------------
# Health tracking
# ---------------------------------------------------------------------------

@dataclass
class IntegrationHealth:
    """Health metrics for an adapter."""
    adapter_name: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    auth_failures: int = 0
    avg_latency_ms: float = 0.0
    last_success: datetime | None = None
    last_failure: datetime | None = None
    last_error: str | None = None

    @property
    def error_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.failed_requests / self.total_requests

    def to_dict(self) -> dict[str, Any]:
        return {
            "adapter_name": self.adapter_name,
            "total_requests": self.total_requests,
            "successful": self.successful_requests,
            "failed": self.failed_requests,
            "auth_failures": self.auth_failures,
            "error_rate": round(self.error_rate, 4),
            "avg_latency_ms": round(self.avg_latency_ms, 1),
            "last_success": self.last_success.isoformat() if self.last_success else None,
            "last_failure": self.last_failure.isoformat() if self.last_failure else None,
            "last_error": self.last_error,
        }


# ---------------------------------------------------------------------------
# AdapterBase
# ---------------------------------------------------------------------------

class AdapterBase(ABC):
    """
    Base class for all external API adapters.

    Subclasses must set:
        name: str      adapter identifier
        base_url: str  API root URL (or pass it to __init__)

    ``transport`` is handed to httpx unchanged, so tests can plug in
    ``httpx.MockTransport``.
    """

    name: str = ""
    base_url: str = ""
    DEFAULT_TIMEOUT: float = 15.0

    def __init__(
        self,
        credentials: AuthCredentials | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._credentials = credentials
        if base_url is not None:
            self.base_url = base_url
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self._transport = transport
        self._health = IntegrationHealth(adapter_name=self.name)
        self._latencies: list[float] = []

    # --- Auth headers ---

    def get_auth_headers(self) -> dict[str, str]:
        creds = self._credentials
        if not creds:
            return {}

        if creds.auth_type == AuthType.API_KEY and creds.api_key:
            value = f"{creds.api_key_prefix} {creds.api_key}" if creds.api_key_prefix else creds.api_key
            return {creds.api_key_header: value}

        if creds.auth_type == AuthType.CUSTOM:
            return dict(creds.custom_headers)

        return {}

    # --- Health ---

    def _update_health(self, latency_ms: float, success: bool, error: str | None = None) -> None:
        now = datetime.now(timezone.utc)
        self._health.total_requests += 1
        self._latencies.append(latency_ms)
        if len(self._latencies) > 1000:
            self._latencies = self._latencies[-500:]

        if success:
            self._health.successful_requests += 1
            self._health.last_success = now
        else:
            self._health.failed_requests += 1
            self._health.last_failure = now
            self._health.last_error = error

        self._health.avg_latency_ms = sum(self._latencies) / len(self._latencies)

    def get_health(self) -> IntegrationHealth:
        return self._health

    # --- Core request ---

    async def request(self, req: AdapterRequest) -> AdapterResponse:
        """
        Execute a single request: Auth → Send (bounded timeout) → Health.

        Never raises for network problems; the envelope carries the error.
        """
        url = f"{self.base_url.rstrip('/')}/{req.path.lstrip('/')}"
        headers = {**self.get_auth_headers(), **req.headers}
        timeout = req.timeout if req.timeout is not None else self.timeout

        start = time.time()
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.request(
                    method=req.method,
                    url=url,
                    params=req.params or None,
                    json=req.body,
                    headers=headers,
                    timeout=timeout,
                )
        except httpx.TimeoutException:
            latency = (time.time() - start) * 1000
            error = f"{self.name} request timed out after {timeout}s"
            logger.warning(error)
            self._update_health(latency, False, error)
            return AdapterResponse(status_code=504, error=error, latency_ms=latency, adapter_name=self.name)
        except httpx.HTTPError as exc:
            latency = (time.time() - start) * 1000
            error = f"{self.name} request failed: {exc}"
            logger.warning(error)
            self._update_health(latency, False, error)
            return AdapterResponse(status_code=502, error=error, latency_ms=latency, adapter_name=self.name)

        latency = (time.time() - start) * 1000
        if resp.status_code in (401, 403):
            self._health.auth_failures += 1

        is_json = resp.headers.get("content-type", "").startswith("application/json")
        data = resp.json() if is_json else resp.text
        error = None if resp.status_code < 400 else f"HTTP {resp.status_code}: {resp.text[:200]}"
        self._update_health(latency, error is None, error)
        return AdapterResponse(
            status_code=resp.status_code,
            data=data,
            headers=dict(resp.headers),
            latency_ms=latency,
            adapter_name=self.name,
            error=error,
        )

"""
Core Integrations: Universal Adapter Framework.

Provides vendor-agnostic integration infrastructure:
- AdapterBase: HTTP adapter with header auth, bounded timeout and health tracking
- AdapterRequest / AdapterResponse: standardized request/response envelope
"""
from core.integrations.adapter_base import (
    AdapterBase,
    AdapterRequest,
    AdapterResponse,
    AuthCredentials,
    AuthType,
    IntegrationHealth,
)

__all__ = [
    "AdapterBase",
    "AdapterRequest",
    "AdapterResponse",
    "AuthCredentials",
    "AuthType",
    "IntegrationHealth",
]

"""Dataclass-based application configuration.

Each concern defines its settings as a frozen dataclass. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars or tests)

Covers the commerce platform connection and the local storage paths of the
combo builder admin.
"""

import os
from dataclasses import dataclass, field, replace


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CommerceConfig:
    """Commerce platform Admin API connection."""

    shop_domain: str = ""
    access_token: str = ""
    api_version: str = "2024-10"
    timeout_seconds: float = 15.0  # bounded; a timeout is an ordinary failure


@dataclass(frozen=True)
class StorageConfig:
    """Local files used by the editor session cache and the receiver log."""

    session_cache_path: str = ".cache/combo_session.json"
    session_slot: str = "combo_design_config"
    receiver_log_dir: str = "logs"
    receiver_log_file: str = "receiver.log"


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ComboBuilderSettings:
    """Complete configuration for the combo builder admin.

    Usage::

        settings = ComboBuilderSettings.from_env()
        adapter = ShopifyDiscountAdapter(settings.commerce)
    """

    commerce: CommerceConfig = field(default_factory=CommerceConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    seed_sample_discounts: bool = True

    @classmethod
    def default(cls) -> "ComboBuilderSettings":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "COMBO_") -> "ComboBuilderSettings":
        """Create config from environment variables.

        Example: COMBO_SHOP_DOMAIN=acme.myshopify.com
        """
        base = cls()

        commerce = base.commerce
        shop = os.getenv(f"{prefix}SHOP_DOMAIN")
        if shop:
            commerce = replace(commerce, shop_domain=shop)
        token = os.getenv(f"{prefix}ACCESS_TOKEN")
        if token:
            commerce = replace(commerce, access_token=token)
        version = os.getenv(f"{prefix}API_VERSION")
        if version:
            commerce = replace(commerce, api_version=version)
        timeout = os.getenv(f"{prefix}API_TIMEOUT")
        if timeout:
            commerce = replace(commerce, timeout_seconds=float(timeout))

        storage = base.storage
        cache_path = os.getenv(f"{prefix}SESSION_CACHE_PATH")
        if cache_path:
            storage = replace(storage, session_cache_path=cache_path)
        log_dir = os.getenv(f"{prefix}RECEIVER_LOG_DIR")
        if log_dir:
            storage = replace(storage, receiver_log_dir=log_dir)

        overrides = {}
        seed = os.getenv(f"{prefix}SEED_SAMPLE_DISCOUNTS")
        if seed:
            overrides["seed_sample_discounts"] = seed.lower() == "true"

        return cls(commerce=commerce, storage=storage, **overrides)

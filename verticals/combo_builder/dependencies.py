"""FastAPI dependency providers for the process-wide combo builder state.

The editor store, the discount catalog, the platform adapter and the receiver
log are built once from settings and injected into routes, so tests can swap
any of them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from verticals.combo_builder.commerce import ShopifyDiscountAdapter
from verticals.combo_builder.config import settings
from verticals.combo_builder.discounts import DiscountCatalog
from verticals.combo_builder.receiver import ReceiverLog
from verticals.combo_builder.session_cache import JsonFileSessionCache, build_store
from verticals.combo_builder.store import ConfigStore


@lru_cache(maxsize=1)
def get_config_store() -> ConfigStore:
    cache = JsonFileSessionCache(settings.storage.session_cache_path)
    return build_store(cache, settings.storage.session_slot)


@lru_cache(maxsize=1)
def get_discount_catalog() -> DiscountCatalog:
    if settings.seed_sample_discounts:
        return DiscountCatalog.with_samples()
    return DiscountCatalog()


@lru_cache(maxsize=1)
def get_discount_adapter() -> ShopifyDiscountAdapter:
    return ShopifyDiscountAdapter(settings.commerce)


@lru_cache(maxsize=1)
def get_receiver_log() -> ReceiverLog:
    return ReceiverLog(settings.storage.receiver_log_dir, settings.storage.receiver_log_file)

"""Test dataclass settings and logging setup."""
import logging

import pytest

from core.observability.logging_setup import setup_logging
from patterns.domain_config import ComboBuilderSettings


def test_defaults():
    settings = ComboBuilderSettings.default()
    assert settings.commerce.api_version == "2024-10"
    assert settings.storage.session_slot == "combo_design_config"
    assert settings.storage.receiver_log_file == "receiver.log"
    assert settings.seed_sample_discounts is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("COMBO_SHOP_DOMAIN", "acme.myshopify.com")
    monkeypatch.setenv("COMBO_ACCESS_TOKEN", "secret")
    monkeypatch.setenv("COMBO_API_TIMEOUT", "3.5")
    monkeypatch.setenv("COMBO_RECEIVER_LOG_DIR", "/tmp/receiver")
    monkeypatch.setenv("COMBO_SEED_SAMPLE_DISCOUNTS", "false")
    settings = ComboBuilderSettings.from_env()
    assert settings.commerce.shop_domain == "acme.myshopify.com"
    assert settings.commerce.access_token == "secret"
    assert settings.commerce.timeout_seconds == 3.5
    assert settings.storage.receiver_log_dir == "/tmp/receiver"
    assert settings.seed_sample_discounts is False


def test_settings_frozen():
    settings = ComboBuilderSettings.default()
    with pytest.raises(Exception):
        settings.seed_sample_discounts = False  # type: ignore[misc]


def test_setup_logging_level():
    root = setup_logging("warning")
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    setup_logging("INFO")

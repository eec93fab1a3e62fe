"""Tests for the InvoiceKit application context."""

import pytest

from invoicekit.config import hierarchy
from invoicekit.config.schema import CacheConfig
from invoicekit.core import InvoiceKit
from invoicekit.errors.exceptions import ConfigError
from invoicekit.types import RenderedDocument


@pytest.fixture(autouse=True)
def _no_global_config(tmp_path, monkeypatch):
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    monkeypatch.chdir(tmp_path)


class _Renderer:
    def render(self, invoice_id, invoice):
        return RenderedDocument.uniform(1)


class TestInvoiceKit:
    def test_builds_cache_from_defaults(self):
        kit = InvoiceKit()
        assert kit.cache.config == CacheConfig()
        assert kit.settings["cache_max_entries"] == 20

    def test_overrides(self):
        kit = InvoiceKit(cache_max_entries=3, cache_min_eviction_batch=1)
        assert kit.cache.config.max_entry_count == 3
        assert kit.cache.config.min_eviction_batch == 1

    def test_explicit_cache_config(self):
        config = CacheConfig(max_entry_count=2)
        kit = InvoiceKit(cache_config=config)
        assert kit.cache.config is config
        assert kit.settings == {}

    def test_invalid_override_raises(self):
        with pytest.raises(ConfigError):
            InvoiceKit(cache_max_entries=0)

    def test_providers_share_one_cache(self):
        kit = InvoiceKit()
        a = kit.provider(_Renderer())
        b = kit.provider(_Renderer())
        doc = a.get_document("inv-1", None)
        assert b.get_document("inv-1", None) is doc
        assert a.cache is b.cache is kit.cache

    def test_config_file(self, tmp_path):
        (tmp_path / "invoicekit.yaml").write_text("cache_max_size_bytes: 2000000\n")
        kit = InvoiceKit()
        assert kit.cache.config.max_total_size_bytes == 2_000_000

    def test_cache_config_with_overrides_rejected(self):
        with pytest.raises(ConfigError, match="not both"):
            InvoiceKit(cache_config=CacheConfig(), cache_max_entries=3)

    def test_cache_config_with_config_path_rejected(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("cache_max_entries: 4\n")
        with pytest.raises(ConfigError):
            InvoiceKit(cache_config=CacheConfig(), config_path=path)

    def test_cache_config_with_none_overrides_allowed(self):
        config = CacheConfig(max_entry_count=2)
        kit = InvoiceKit(cache_config=config, cache_max_entries=None)
        assert kit.cache.config is config

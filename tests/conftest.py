import pytest

from invoicekit.config.hierarchy import _ENV_MAP
from invoicekit.config.schema import CacheConfig
from invoicekit.types import LETTER, PageSize, RenderedDocument


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep INVOICEKIT_* variables from the host out of every test."""
    for env_key in _ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)


@pytest.fixture
def make_document():
    """Factory for rendered documents: make_document(pages, page=LETTER)."""

    def _make(pages: int = 1, page: PageSize = LETTER) -> RenderedDocument:
        return RenderedDocument.uniform(pages, page)

    return _make


@pytest.fixture
def two_slot_config():
    """Count-bound cache of two entries, evicting one at a time."""
    return CacheConfig(
        max_total_size_bytes=10**9,
        max_entry_count=2,
        min_eviction_batch=1,
    )

"""Approximate cache footprint of a rendered document.

The estimate is a capacity-accounting policy, not a byte count of any
renderer's output: ``pages x bytes_per_page``, scaled by
``oversized_multiplier`` when the first page's area is strictly larger than
``oversized_page_area``. The default threshold of 880,000 sq pt (800 x 1100)
keeps Letter, A4 and Legal at the base rate and bumps Tabloid and larger.
"""

from __future__ import annotations

from invoicekit.config.schema import SizeEstimatePolicy
from invoicekit.types import PagedDocument

_DEFAULT_POLICY = SizeEstimatePolicy()


def estimate_document_size(
    document: PagedDocument,
    policy: SizeEstimatePolicy | None = None,
) -> int:
    """Estimate the bytes a document occupies for cache accounting."""
    policy = policy or _DEFAULT_POLICY
    estimated = document.page_count * policy.bytes_per_page

    first_page = document.first_page
    if first_page is not None and is_oversized(first_page.area, policy):
        estimated = int(estimated * policy.oversized_multiplier)

    return estimated


def is_oversized(area: float, policy: SizeEstimatePolicy | None = None) -> bool:
    """True if a page of this area (sq pt) gets the oversized multiplier."""
    policy = policy or _DEFAULT_POLICY
    return area > policy.oversized_page_area

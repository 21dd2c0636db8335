"""
Pagination - page metadata, page slicing and response size limits
"""

import logging
from typing import Any, Dict, List, Sequence

from ..constants import CHARACTER_LIMIT, TRUNCATION_NOTICE

logger = logging.getLogger(__name__)

# A clean cut at a newline is only taken within this share of the limit.
CLEAN_CUT_RATIO = 0.8


def pagination_meta(total: int, page: int, per_page: int) -> Dict[str, Any]:
    """
    Build pagination metadata for a page of a result set.

    Args:
        total: Number of items in the whole result set
        page: 1-based page number
        per_page: Page size

    Returns:
        Dictionary with total, count, page, per_page and has_more. A page past
        the end has a count of zero.
    """
    start = (page - 1) * per_page
    count = max(0, min(per_page, total - start))
    return {
        "total": total,
        "count": count,
        "page": page,
        "per_page": per_page,
        "has_more": page * per_page < total,
    }


def paginate(items: Sequence[Any], page: int, per_page: int) -> List[Any]:
    """Return the items on a 1-based page."""
    start = (page - 1) * per_page
    return list(items[start:start + per_page])


def enforce_size_limit(text: str, limit: int = CHARACTER_LIMIT) -> str:
    """
    Truncate serialized output to the character limit.

    The cut is moved back to the last newline before the limit when that
    newline lies within the last 20% of the limit, otherwise the hard cut
    is kept. A notice telling the caller how to narrow the request is
    appended to truncated output.
    """
    if len(text) <= limit:
        return text

    truncated = text[:limit]
    last_newline = truncated.rfind("\n")
    if last_newline > limit * CLEAN_CUT_RATIO:
        truncated = truncated[:last_newline]

    logger.warning(
        f"Response of {len(text)} characters truncated to {len(truncated)} (limit {limit})"
    )
    return truncated + TRUNCATION_NOTICE

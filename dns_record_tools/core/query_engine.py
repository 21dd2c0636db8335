"""
Query Engine - Filtering, ordering and shaping of zone record listings

A listing request is answered in exactly one of three modes, chosen in
this order: summary, random sample, paginated page.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from . import sampler
from .summarizer import summarize
from ..constants import (
    DEFAULT_FETCH_PAGE_SIZE,
    DEFAULT_PER_PAGE,
    DEFAULT_SAMPLE_SIZE,
    FETCH_CAP_FACTOR,
    SUMMARY_THRESHOLD,
)
from ..formatters.record import format_records
from ..models import QueryFilter, record_sort_key
from ..utils.pagination import paginate, pagination_meta
from ..utils.validators import (
    require_zone_id,
    validate_order,
    validate_pagination,
    validate_query_filter,
    validate_sample_size,
)

logger = logging.getLogger(__name__)


class QueryEngine:
    """Answers record listing requests against the Directory."""

    def __init__(self, dns_client, fetch_page_size: int = DEFAULT_FETCH_PAGE_SIZE):
        """Initialize query engine with Directory client."""
        self.dns_client = dns_client
        self.fetch_page_size = fetch_page_size

    def list_records(
        self,
        zone_id: str,
        query_filter: Optional[QueryFilter] = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
        order: Optional[str] = None,
        summary_only: bool = False,
        random_sample: bool = False,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        concise: bool = True,
        rng: Optional[random.Random] = None,
    ) -> Dict[str, Any]:
        """
        List records for a zone in summary, sample or paginated mode.

        Args:
            zone_id: Zone to list
            query_filter: Criteria every returned record must match
            page: 1-based page number (paginated mode)
            per_page: Page size (paginated mode)
            order: Field to sort by, ascending (paginated mode)
            summary_only: Return only the type and proxy distribution
            random_sample: Return a uniform random sample of matching records
            sample_size: Number of records in the sample
            concise: Project records to the concise field set
            rng: Random source for sampling

        Returns:
            One of {"summary"}, {"sample", "records"} or
            {"pagination", ["summary"], "records"}

        Raises:
            InputInvalidError: parameters rejected before any Directory call
            DirectoryError: the Directory call failed
        """
        query_filter = query_filter or QueryFilter()
        require_zone_id(zone_id)
        validate_query_filter(query_filter)
        validate_pagination(page, per_page)
        validate_sample_size(sample_size)
        validate_order(order)

        if summary_only:
            logger.info(f"Summarizing records for zone {zone_id}")
            records, _ = self.fetch_records(zone_id, query_filter)
            return {"summary": summarize(records)}

        if random_sample:
            logger.info(f"Sampling {sample_size} records from zone {zone_id}")
            records, _ = self.fetch_records(zone_id, query_filter)
            sampled = sampler.random_sample(records, sample_size, rng)
            return {
                "sample": {"total_in_zone": len(records), "sample_size": len(sampled)},
                "records": format_records(sampled, concise),
            }

        logger.info(f"Listing page {page} of records for zone {zone_id}")
        limit = max(page * per_page + 1, per_page * FETCH_CAP_FACTOR)
        records, capped = self.fetch_records(zone_id, query_filter, order=order, limit=limit)
        if order:
            records = sorted(records, key=record_sort_key(order))

        pagination = pagination_meta(len(records), page, per_page)
        if capped:
            pagination["total_is_lower_bound"] = True

        output: Dict[str, Any] = {"pagination": pagination}
        if len(records) > SUMMARY_THRESHOLD:
            output["summary"] = summarize(records)
        output["records"] = format_records(paginate(records, page, per_page), concise)
        return output

    def fetch_records(
        self,
        zone_id: str,
        query_filter: QueryFilter,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict], bool]:
        """
        Collect matching records from the Directory page by page.

        Filters are sent to the Directory and every returned record is checked
        again locally, so a filter the Directory ignores still applies.

        Returns:
            The matching records, and whether a further matching record was
            left behind because of the limit
        """
        params = query_filter.to_params()
        if order:
            params["order"] = order

        records: List[Dict] = []
        dropped = 0
        page = 1
        while True:
            batch = self.dns_client.list_records(zone_id, params, page, self.fetch_page_size)
            for record in batch:
                if not query_filter.matches(record):
                    dropped += 1
                    continue
                if limit is not None and len(records) >= limit:
                    self._log_fetch(zone_id, records, dropped, capped=True)
                    return records, True
                records.append(record)

            if len(batch) < self.fetch_page_size:
                break
            page += 1

        self._log_fetch(zone_id, records, dropped, capped=False)
        return records, False

    def _log_fetch(self, zone_id: str, records: List[Dict], dropped: int, capped: bool) -> None:
        if dropped:
            logger.debug(
                f"Discarded {dropped} records from zone {zone_id} that did not match the filter"
            )
        if capped:
            logger.info(f"Stopped fetching zone {zone_id} after {len(records)} records")
        else:
            logger.info(f"Fetched {len(records)} matching records from zone {zone_id}")

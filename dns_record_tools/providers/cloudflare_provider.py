"""
Cloudflare Directory provider implementation.

This module talks to the Cloudflare v4 REST API with a requests session
authenticated by an API token. HTTP failures are raised as DirectoryError
subclasses matching the response status.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .base_provider import DirectoryProvider
from ..constants import CLOUDFLARE_API_BASE, DEFAULT_TIMEOUT
from ..utils.errors import (
    ConfigurationError,
    DirectoryConnectionError,
    DirectoryError,
    error_for_status,
)

logger = logging.getLogger(__name__)

ZONE_PAGE_SIZE = 50


class CloudflareDirectory(DirectoryProvider):
    """Directory provider backed by the Cloudflare API."""

    def __init__(self, config: Dict, session: Optional[requests.Session] = None):
        """Initialize Cloudflare provider."""
        self.config = config
        self.api_token = config.get("api_token", "")
        self.base_url = config.get("base_url", CLOUDFLARE_API_BASE).rstrip("/")
        self.timeout = config.get("timeout", DEFAULT_TIMEOUT)

        if not self.api_token:
            raise ConfigurationError(
                "CLOUDFLARE_API_TOKEN environment variable or directory_providers."
                "cloudflare.api_token is required. Create a token at "
                "https://dash.cloudflare.com/profile/api-tokens with Zone:Read and "
                "DNS:Edit permissions."
            )

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {self.api_token}",
                "Content-Type": "application/json",
            }
        )
        logger.info(f"Cloudflare provider initialized for {self.base_url}")

    def verify_token(self) -> Dict[str, str]:
        """Check the API token is active."""
        result = self._request("GET", "/user/tokens/verify")["result"]
        if result.get("status") != "active":
            raise ConfigurationError(
                f"API token is not active (status: {result.get('status')}). Create a new "
                "token at https://dash.cloudflare.com/profile/api-tokens"
            )
        return {"id": result.get("id", ""), "status": result["status"]}

    def list_zones(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict]:
        """List all zones matching the filters, following every result page."""
        zones: List[Dict] = []
        page = 1
        while True:
            params = dict(filters or {})
            params.update({"page": page, "per_page": ZONE_PAGE_SIZE})
            body = self._request("GET", "/zones", params=params)
            zones.extend(body.get("result") or [])

            total_pages = (body.get("result_info") or {}).get("total_pages", 1)
            if page >= total_pages or not body.get("result"):
                break
            page += 1

        logger.info(f"Retrieved {len(zones)} zones from Cloudflare")
        return zones

    def get_zone(self, zone_id: str) -> Dict:
        return self._request("GET", f"/zones/{zone_id}")["result"]

    def list_records(
        self,
        zone_id: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Dict]:
        """Get one page of DNS records. All filters are combined with AND."""
        params: Dict[str, Any] = {"match": "all", "page": page, "per_page": per_page}
        for key, value in (filters or {}).items():
            # the API expects lowercase booleans in the query string
            params[key] = str(value).lower() if isinstance(value, bool) else value

        body = self._request("GET", f"/zones/{zone_id}/dns_records", params=params)
        records = body.get("result") or []
        logger.debug(f"Retrieved {len(records)} records from zone {zone_id} (page {page})")
        return records

    def get_record(self, zone_id: str, record_id: str) -> Dict:
        return self._request("GET", f"/zones/{zone_id}/dns_records/{record_id}")["result"]

    def create_record(self, zone_id: str, fields: Dict[str, Any]) -> Dict:
        record = self._request("POST", f"/zones/{zone_id}/dns_records", json=fields)["result"]
        logger.debug(f"Created record {record.get('type')} {record.get('name')}")
        return record

    def update_record(self, zone_id: str, record_id: str, fields: Dict[str, Any]) -> Dict:
        record = self._request(
            "PATCH", f"/zones/{zone_id}/dns_records/{record_id}", json=fields
        )["result"]
        logger.debug(f"Updated record {record_id}")
        return record

    def delete_record(self, zone_id: str, record_id: str) -> None:
        self._request("DELETE", f"/zones/{zone_id}/dns_records/{record_id}")
        logger.debug(f"Deleted record {record_id}")

    def export_zone(self, zone_id: str) -> str:
        return self._request(
            "GET", f"/zones/{zone_id}/dns_records/export", expect_json=False
        )

    def _request(self, method: str, path: str, expect_json: bool = True, **kwargs):
        """Send a request and return the decoded body, raising on failure."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise DirectoryConnectionError(f"request timed out after {self.timeout}s: {e}")
        except requests.exceptions.ConnectionError as e:
            raise DirectoryConnectionError(str(e))
        except requests.exceptions.RequestException as e:
            raise DirectoryError(f"request failed: {e}")

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"{method} {path} failed with {response.status_code}: {message}")
            raise error_for_status(response.status_code, message)

        if not expect_json:
            return response.text

        try:
            body = response.json()
        except ValueError:
            raise DirectoryError(f"Unexpected non-JSON response from {path}")

        if not body.get("success", True):
            raise DirectoryError(self._format_errors(body.get("errors")))
        return body

    def _error_message(self, response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or response.reason or "Unknown error"
        return self._format_errors(body.get("errors")) or response.reason or "Unknown error"

    @staticmethod
    def _format_errors(errors: Optional[List[Dict]]) -> str:
        messages = []
        for error in errors or []:
            if error.get("code"):
                messages.append(f"{error.get('message')} (code {error['code']})")
            else:
                messages.append(str(error.get("message")))
        return "; ".join(messages)

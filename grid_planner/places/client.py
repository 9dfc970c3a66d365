"""
Places Nearby Search Client

Queries the Google Places Nearby Search endpoint for a single search cell,
following next_page_token until the result limit is reached.
"""

import time
from threading import Lock
from typing import Dict, List, Optional

import httpx
import structlog

from ..config import PLACES_NEARBY_URL
from ..config_manager import SweepConfig
from ..exceptions import PlacesApiError, RateLimitError
from ..geo.models import SearchCell

log = structlog.get_logger()

OK_STATUSES = ("OK", "ZERO_RESULTS")


class PlacesClient:
    """Thin wrapper around the Places Nearby Search API.

    Owns an httpx client unless one is passed in. Use as a context manager
    to close the owned client.

    Args:
        sweep_config: Key, proxy, timeout and pagination settings.
        http_client: Optional pre-built httpx client (e.g. with a mock transport).

    Example:
        with PlacesClient(SweepConfig(api_key="...")) as places:
            results = places.find_nearby_places(cell, "restaurant")
    """

    def __init__(
        self,
        sweep_config: Optional[SweepConfig] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self._config = sweep_config or SweepConfig()
        self._api_key = self._config.require_api_key()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=self._config.timeout,
            proxy=self._config.proxy_url,
        )
        self.requests_made = 0
        self._counter_lock = Lock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        if self._owns_client:
            self._client.close()

    def find_nearby_places(
        self,
        cell: SearchCell,
        place_type: str,
        keyword: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> List[Dict]:
        """
        Fetch places around one cell, following pagination.

        Args:
            cell: Search cell (center and radius)
            place_type: Places API type (e.g., "restaurant")
            keyword: Optional keyword filter
            max_results: Cap on results (defaults to the configured limit)

        Returns:
            List of raw place dictionaries, at most max_results long

        Raises:
            RateLimitError: If the API reports OVER_QUERY_LIMIT
            PlacesApiError: On any other error status or transport failure of
                the first page. Follow-up pages are retried up to max_retries
                times; after that the places collected so far are returned.
        """
        if max_results is None:
            max_results = self._config.max_results

        page = self._fetch_page(cell, place_type, keyword, None)
        results = list(page.get("results", []))
        page_token = page.get("next_page_token")

        while page_token and len(results) < max_results:
            time.sleep(self._config.delay_between_pages)

            page = self._fetch_next_page(cell, place_type, keyword, page_token)
            if page is None:
                break

            results.extend(page.get("results", []))
            page_token = page.get("next_page_token")

        return results[:max_results]

    def _fetch_next_page(
        self,
        cell: SearchCell,
        place_type: str,
        keyword: Optional[str],
        page_token: str,
    ) -> Optional[Dict]:
        """
        Fetch a follow-up page, retrying failures with a growing backoff.

        Returns None once retries are exhausted so the caller keeps the
        pages it already has. Rate-limit errors are never retried.
        """
        for attempt in range(self._config.max_retries + 1):
            try:
                return self._fetch_page(cell, place_type, keyword, page_token)
            except RateLimitError:
                raise
            except PlacesApiError as e:
                if attempt >= self._config.max_retries:
                    log.warning("places.page_failed", cell=str(cell.center),
                                attempts=attempt + 1, error=str(e))
                    return None
                time.sleep(self._config.retry_backoff * (attempt + 1))
        return None

    def _fetch_page(
        self,
        cell: SearchCell,
        place_type: str,
        keyword: Optional[str],
        page_token: Optional[str],
    ) -> Dict:
        """Fetch a single page of nearby results."""
        params = {
            "location": f"{cell.center.lat},{cell.center.lng}",
            "radius": round(cell.radius),
            "type": place_type,
            "key": self._api_key,
        }
        if keyword:
            params["keyword"] = keyword
        if page_token:
            params["pagetoken"] = page_token

        with self._counter_lock:
            self.requests_made += 1
        try:
            response = self._client.get(PLACES_NEARBY_URL, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PlacesApiError(f"Nearby search failed: {e}") from e

        status = data.get("status")
        if status in OK_STATUSES:
            return data

        message = data.get("error_message") or f"API returned status: {status}"
        if status == "OVER_QUERY_LIMIT":
            log.warning("places.rate_limited", message=message)
            raise RateLimitError(message, status=status)

        log.error("places.error", status=status, message=message)
        raise PlacesApiError(message, status=status)

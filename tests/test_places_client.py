"""
Tests for the places nearby search client.
"""

import threading
import unittest

import httpx

from grid_planner.config_manager import SweepConfig
from grid_planner.exceptions import ConfigurationError, PlacesApiError, RateLimitError
from grid_planner.geo import Coordinate, SearchCell
from grid_planner.places import PlacesClient

CELL = SearchCell(center=Coordinate(45.4, -75.7), radius=1000)


def page(ids, token=None, status="OK"):
    data = {"status": status, "results": [{"place_id": i, "name": f"Place {i}"} for i in ids]}
    if token:
        data["next_page_token"] = token
    return data


class FakePlacesApi:
    """Serves canned pages keyed by the pagetoken parameter."""

    def __init__(self, pages):
        self.pages = pages
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        token = request.url.params.get("pagetoken")
        return httpx.Response(200, json=self.pages[token])


def make_places_client(api, max_results=60, max_retries=3):
    config = SweepConfig(api_key="test-key", delay_between_pages=0, max_results=max_results,
                         max_retries=max_retries, retry_backoff=0)
    http_client = httpx.Client(transport=httpx.MockTransport(api))
    return PlacesClient(config, http_client=http_client)


class TestFindNearbyPlaces(unittest.TestCase):
    """Test nearby search with pagination."""

    def test_single_page(self):
        """Test a response without a token stops after one request."""
        api = FakePlacesApi({None: page(["a", "b"])})
        with make_places_client(api) as client:
            results = client.find_nearby_places(CELL, "restaurant")

        self.assertEqual([r["place_id"] for r in results], ["a", "b"])
        self.assertEqual(len(api.requests), 1)

        params = api.requests[0].url.params
        self.assertEqual(params["location"], "45.4,-75.7")
        self.assertEqual(params["radius"], "1000")
        self.assertEqual(params["type"], "restaurant")
        self.assertEqual(params["key"], "test-key")
        self.assertNotIn("keyword", params)
        self.assertNotIn("pagetoken", params)

    def test_follows_page_tokens(self):
        """Test next_page_token is followed until exhausted."""
        api = FakePlacesApi({
            None: page(["a"], token="t1"),
            "t1": page(["b"], token="t2"),
            "t2": page(["c"]),
        })
        with make_places_client(api) as client:
            results = client.find_nearby_places(CELL, "cafe", keyword="espresso")

        self.assertEqual([r["place_id"] for r in results], ["a", "b", "c"])
        self.assertEqual(client.requests_made, 3)
        self.assertEqual(api.requests[1].url.params["pagetoken"], "t1")
        self.assertEqual(api.requests[2].url.params["keyword"], "espresso")

    def test_stops_at_max_results(self):
        """Test pagination stops once max_results is reached."""
        api = FakePlacesApi({
            None: page([f"p{i}" for i in range(20)], token="t1"),
            "t1": page([f"q{i}" for i in range(20)], token="t2"),
        })
        with make_places_client(api, max_results=30) as client:
            results = client.find_nearby_places(CELL, "bar")

        self.assertEqual(len(results), 30)
        self.assertEqual(len(api.requests), 2)

    def test_zero_results(self):
        """Test ZERO_RESULTS is an empty, successful response."""
        api = FakePlacesApi({None: page([], status="ZERO_RESULTS")})
        with make_places_client(api) as client:
            self.assertEqual(client.find_nearby_places(CELL, "bar"), [])

    def test_over_query_limit(self):
        """Test OVER_QUERY_LIMIT raises RateLimitError."""
        api = FakePlacesApi({None: page([], status="OVER_QUERY_LIMIT")})
        with make_places_client(api) as client:
            with self.assertRaises(RateLimitError) as ctx:
                client.find_nearby_places(CELL, "bar")
        self.assertEqual(ctx.exception.status, "OVER_QUERY_LIMIT")

    def test_request_denied(self):
        """Test other error statuses raise PlacesApiError."""
        data = page([], status="REQUEST_DENIED")
        data["error_message"] = "The provided API key is invalid."
        api = FakePlacesApi({None: data})
        with make_places_client(api) as client:
            with self.assertRaises(PlacesApiError) as ctx:
                client.find_nearby_places(CELL, "bar")
        self.assertNotIsInstance(ctx.exception, RateLimitError)
        self.assertEqual(ctx.exception.status, "REQUEST_DENIED")
        self.assertIn("invalid", str(ctx.exception))

    def test_transport_error(self):
        """Test HTTP failures are wrapped in PlacesApiError."""
        def handler(request):
            return httpx.Response(503, text="unavailable")

        with make_places_client(handler) as client:
            with self.assertRaises(PlacesApiError):
                client.find_nearby_places(CELL, "bar")

    def test_retries_failed_follow_up_page(self):
        """Test a follow-up page that fails once is retried and collected."""
        attempts = {"t1": 0}

        def handler(request):
            token = request.url.params.get("pagetoken")
            if token is None:
                return httpx.Response(200, json=page(["a"], token="t1"))
            attempts["t1"] += 1
            if attempts["t1"] == 1:
                return httpx.Response(503, text="unavailable")
            return httpx.Response(200, json=page(["b"]))

        with make_places_client(handler) as client:
            results = client.find_nearby_places(CELL, "bar")

        self.assertEqual([r["place_id"] for r in results], ["a", "b"])
        self.assertEqual(attempts["t1"], 2)

    def test_keeps_earlier_pages_when_retries_exhausted(self):
        """Test results already fetched survive a follow-up page that keeps failing."""
        attempts = {"t1": 0}

        def handler(request):
            if request.url.params.get("pagetoken") is None:
                return httpx.Response(200, json=page(["a"], token="t1"))
            attempts["t1"] += 1
            return httpx.Response(200, json=page([], status="UNKNOWN_ERROR"))

        with make_places_client(handler, max_retries=2) as client:
            results = client.find_nearby_places(CELL, "bar")

        self.assertEqual([r["place_id"] for r in results], ["a"])
        self.assertEqual(attempts["t1"], 3)
        self.assertEqual(client.requests_made, 4)

    def test_rate_limit_on_follow_up_page_not_retried(self):
        """Test OVER_QUERY_LIMIT on a later page propagates immediately."""
        api = FakePlacesApi({
            None: page(["a"], token="t1"),
            "t1": page([], status="OVER_QUERY_LIMIT"),
        })
        with make_places_client(api) as client:
            with self.assertRaises(RateLimitError):
                client.find_nearby_places(CELL, "bar")
        self.assertEqual(len(api.requests), 2)

    def test_request_count_across_threads(self):
        """Test requests_made is exact when cells are queried concurrently."""
        api = FakePlacesApi({None: page(["a"])})
        with make_places_client(api) as client:
            def worker():
                for _ in range(50):
                    client.find_nearby_places(CELL, "bar")

            threads = [threading.Thread(target=worker) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        self.assertEqual(client.requests_made, 400)

    def test_requires_api_key(self):
        """Test constructing without a key raises ConfigurationError."""
        with self.assertRaises(ConfigurationError):
            PlacesClient(SweepConfig(api_key=""))


if __name__ == "__main__":
    unittest.main()

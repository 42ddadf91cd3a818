"""Atelier load testing: Locust entry point.

Usage:
    # All user classes (web UI):
    locust -f loadtests/locustfile.py

    # Mixed workload only:
    locust -f loadtests/locustfile.py MixedWorkloadUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.mixed import MixedWorkloadUser, ShopperUser, VendorUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log the API's reason for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, extract_error_detail(response))


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}\n")


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the platform totals once the run ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    try:
        resp = requests.get(
            f"{environment.host}/analytics/dashboard",
            headers={"X-User-Id": "loadtest-admin", "X-User-Role": "Admin"},
            timeout=5,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        print(f"[LOADTEST] Could not fetch dashboard stats: {exc}\n")
        return
    for figure, value in resp.json().items():
        print(f"  {figure}: {value}")
    print()

"""
Fixed-window rate limiting, both through the HTTP API and on the limiter itself.
"""

import time

from marketing_site.core.rate_limit import CONTACT_SCOPE, GENERAL_SCOPE, RequestRateLimiter

from conftest import VALID_SUBMISSION


def test_contact_quota_is_enforced(make_client):
    client = make_client(rate_limiting=True, contact_rate_limit="5 per hour")
    for _ in range(5):
        assert client.post("/contact", json=VALID_SUBMISSION).status_code == 200

    r = client.post("/contact", json=VALID_SUBMISSION)
    assert r.status_code == 429
    assert r.json() == {
        "success": False,
        "error": "Too many contact form submissions. Please try again later.",
        "code": "CONTACT_LIMIT_EXCEEDED",
    }
    assert int(r.headers["Retry-After"]) > 0


def test_contact_quota_counts_rejected_submissions(make_client):
    client = make_client(rate_limiting=True, contact_rate_limit="2 per hour")
    assert client.post("/contact", json={"name": "x"}).status_code == 400
    assert client.post("/contact", json={"name": "x"}).status_code == 400
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 429


def test_contact_quota_does_not_block_other_routes(make_client):
    client = make_client(rate_limiting=True, contact_rate_limit="1 per hour")
    client.post("/contact", json=VALID_SUBMISSION)
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 429
    assert client.get("/api/services").status_code == 200


def test_contact_quota_resets_after_window(make_client):
    client = make_client(rate_limiting=True, contact_rate_limit="2 per 2 seconds")
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 200
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 200
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 429

    time.sleep(2.2)
    assert client.post("/contact", json=VALID_SUBMISSION).status_code == 200


def test_general_quota_applies_to_every_route(make_client):
    client = make_client(rate_limiting=True, general_rate_limit="3 per minute")
    assert client.get("/health").status_code == 200
    assert client.get("/api/services").status_code == 200
    assert client.get("/robots.txt").status_code == 200

    r = client.get("/health")
    assert r.status_code == 429
    assert r.json()["code"] == "RATE_LIMIT_EXCEEDED"
    assert "Retry-After" in r.headers


def test_rate_limiting_can_be_disabled(make_client):
    client = make_client(rate_limiting=False, contact_rate_limit="1 per hour", general_rate_limit="1 per hour")
    for _ in range(5):
        assert client.post("/contact", json=VALID_SUBMISSION).status_code == 200


# ---- Limiter ----
def test_limiter_counts_per_client_and_scope():
    limiter = RequestRateLimiter("10 per minute", "2 per minute")

    first = limiter.hit(CONTACT_SCOPE, "10.0.0.1")
    assert first.allowed and first.remaining == 1
    assert limiter.hit(CONTACT_SCOPE, "10.0.0.1").allowed
    assert not limiter.hit(CONTACT_SCOPE, "10.0.0.1").allowed

    # separate counters per address and per scope
    assert limiter.hit(CONTACT_SCOPE, "10.0.0.2").allowed
    assert limiter.hit(GENERAL_SCOPE, "10.0.0.1").allowed


def test_limiter_reset_clears_counters():
    limiter = RequestRateLimiter("10 per minute", "1 per minute")
    assert limiter.hit(CONTACT_SCOPE, "10.0.0.1").allowed
    assert not limiter.hit(CONTACT_SCOPE, "10.0.0.1").allowed
    limiter.reset()
    assert limiter.hit(CONTACT_SCOPE, "10.0.0.1").allowed


def test_retry_after_points_into_the_window():
    limiter = RequestRateLimiter("10 per minute", "1 per minute")
    limiter.hit(CONTACT_SCOPE, "10.0.0.1")
    result = limiter.hit(CONTACT_SCOPE, "10.0.0.1")
    assert 0 < result.retry_after <= 61

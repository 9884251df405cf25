# tests/test_service.py
from unittest.mock import patch

from conftest import owm_payload, owm_response

from weather_meme import create_app

UPSTREAM = "weather_meme.services.weather_api.requests.get"


def _make_app(memes_file, images_dir, **overrides):
    config = {
        "TESTING": True,
        "LOG_TO_FILE": False,
        "OPENWEATHER_API_KEY": "test-key",
        "MEMES_FILE": memes_file,
        "IMAGES_DIR": images_dir,
    }
    config.update(overrides)
    return create_app(config)


def test_docs_lists_endpoints(client):
    res = client.get("/docs")
    assert res.status_code == 200

    endpoints = res.get_json()["endpoints"]
    for name in ("GET /weather", "POST /memes", "DELETE /memes/<category>/<index>", "GET /memes-list"):
        assert name in endpoints
    assert endpoints["GET /weather"]["rate_limit"] == "30 per minute"


def test_metrics_are_exported(client):
    client.get("/health")

    res = client.get("/metrics")
    assert res.status_code == 200
    assert b'app_info{version="1.0.0"} 1.0' in res.data
    assert b"flask_http_request_total" in res.data


def test_weather_rate_limit_returns_429(memes_file, images_dir):
    # The limiter is shared by every app in the process; an app with limiting
    # disabled is built first so the limit must still apply to the next one.
    _make_app(memes_file, images_dir, RATELIMIT_ENABLED=False)
    app = _make_app(memes_file, images_dir, WEATHER_RATE_LIMIT="1 per minute")
    client = app.test_client()

    with patch(UPSTREAM, return_value=owm_response(200, owm_payload())) as get:
        first = client.get("/weather?city=Moscow")
        second = client.get("/weather?city=Kazan")

    assert first.status_code == 200
    assert second.status_code == 429
    body = second.get_json()
    assert body["error"] == "Rate limit exceeded"
    assert "1 per 1 minute" in body["message"]
    assert get.call_count == 1


def test_rate_limit_counters_start_fresh_for_each_app(memes_file, images_dir):
    for _ in range(2):
        app = _make_app(memes_file, images_dir, WEATHER_RATE_LIMIT="1 per minute")
        with patch(UPSTREAM, return_value=owm_response(200, owm_payload())):
            assert app.test_client().get("/weather?city=Moscow").status_code == 200

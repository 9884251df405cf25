# tests/conftest.py
import json
from unittest.mock import MagicMock

import pytest

from weather_meme import create_app

SAMPLE_CATALOG = {
    "hot": [{"image": "/images/hot.png", "text": "Жарко"}],
    "warm": [{"image": "/images/warm.png", "text": "Тепло"}],
    "normal": [{"image": "/images/normal.png", "text": "Норм"}],
    "cool": [{"image": "/images/cool.png", "text": "Свежо"}],
    "cold": []
}


def owm_payload(temp=21.4, name="Moscow"):
    """A trimmed-down OpenWeatherMap /weather response."""
    return {
        "name": name,
        "main": {"temp": temp, "humidity": 64},
        "weather": [{"description": "облачно", "icon": "04d"}],
        "wind": {"speed": 3.2, "deg": 190},
        "timezone": 10800,
        "dt": 1700000000
    }


def owm_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {"cod": str(status_code)}
    response.text = json.dumps(payload or {})
    return response


@pytest.fixture
def memes_file(tmp_path):
    path = tmp_path / "data" / "memes.json"
    path.parent.mkdir()
    path.write_text(json.dumps(SAMPLE_CATALOG, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def images_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def app(memes_file, images_dir):
    return create_app({
        "TESTING": True,
        "LOG_TO_FILE": False,
        "RATELIMIT_ENABLED": False,
        "OPENWEATHER_API_KEY": "test-key",
        "BASE_URL": "http://test",
        "MEMES_FILE": memes_file,
        "IMAGES_DIR": images_dir,
    })


@pytest.fixture
def client(app):
    """A Flask test client for calling API endpoints."""
    return app.test_client()

import logging
import math
import time
from pathlib import Path
from typing import Dict, Optional, Union

import requests
from flask import current_app

from weather_meme.errors import CityNotFound, UpstreamError
from weather_meme.utils.memes import get_meme_by_temp

logger = logging.getLogger(__name__)


def round_temperature(temp: float) -> int:
    """Округление с половинами вверх: 2.5 -> 3, -2.5 -> -2"""
    return int(math.floor(temp + 0.5))


class WeatherAPI:
    """Класс для работы с OpenWeatherMap API"""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        config = current_app.config
        self.api_key = api_key if api_key is not None else config['OPENWEATHER_API_KEY']
        self.base_url = base_url or config['OWM_BASE_URL']
        self.timeout = timeout or config['UPSTREAM_TIMEOUT']

    def _log_interaction(self, params: Dict, response, duration: float):
        """Логирование обращения к OpenWeatherMap (без ключа API)"""
        logger.info(
            "OpenWeatherMap API interaction",
            extra={'data': {
                'api_endpoint': self.base_url,
                'request_params': {**params, 'appid': 'REDACTED'},
                'response_status': response.status_code,
                'processing_time_sec': duration
            }}
        )

    def fetch(self, city: str) -> Dict:
        """
        Получение текущей погоды по названию города

        Args:
            city: Название города в том виде, в каком его прислал клиент

        Returns:
            Сырые данные от API

        Raises:
            CityNotFound: Если API ответил 404
            UpstreamError: При любой другой ошибке запроса или ответа
        """
        params = {
            'q': city,
            'units': 'metric',
            'lang': 'ru',
            'appid': self.api_key
        }

        api_start = time.time()
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"OpenWeatherMap API timeout for city {city!r}")
            raise UpstreamError()
        except requests.exceptions.RequestException as e:
            logger.error(f"OpenWeatherMap API error: {str(e)}")
            raise UpstreamError() from e

        self._log_interaction(params, response, time.time() - api_start)

        if response.status_code == 404:
            logger.info(f"City not found upstream: {city!r}")
            raise CityNotFound()

        if response.status_code != 200:
            logger.error(
                f"OpenWeatherMap API returned {response.status_code}",
                extra={'response': response.text}
            )
            raise UpstreamError()

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"OpenWeatherMap API returned invalid JSON: {str(e)}")
            raise UpstreamError() from e

    def extract_weather_info(self, weather_data: Dict, base_url: str,
                             memes_file: Union[str, Path]) -> Dict:
        """
        Извлечение данных о погоде и подбор мема по температуре

        Args:
            weather_data: Сырые данные от API
            base_url: Адрес сервиса для абсолютных ссылок на картинки
            memes_file: Путь к каталогу мемов

        Returns:
            Форматированные данные для ответа
        """
        try:
            main = weather_data['main']
            weather = weather_data['weather'][0]
            temperature = round_temperature(main['temp'])
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected OpenWeatherMap payload: {e!r}")
            raise UpstreamError() from e

        wind = weather_data.get('wind') or {}

        return {
            'city': weather_data.get('name'),
            'temperature': temperature,
            'description': weather.get('description'),
            'icon': weather.get('icon'),
            'wind': {
                'speed': wind.get('speed') or 0,
                'deg': wind.get('deg') or 0
            },
            'main': {'humidity': main.get('humidity') or None},
            'timezone': weather_data.get('timezone'),
            'dt': weather_data.get('dt'),
            'meme': get_meme_by_temp(temperature, base_url, memes_file)
        }

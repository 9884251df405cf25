import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

OPENWEATHER_API_KEY = os.getenv('OPENWEATHER_API_KEY')
OWM_BASE_URL = os.getenv('OWM_BASE_URL', 'https://api.openweathermap.org/data/2.5/weather')
UPSTREAM_TIMEOUT = float(os.getenv('UPSTREAM_TIMEOUT', 10))

PORT = int(os.getenv('PORT', 5000))
BASE_URL = os.getenv('BASE_URL', f'http://localhost:{PORT}')
FRONTEND_URL = os.getenv('FRONTEND_URL', 'https://weather-meme-frontend.vercel.app')

CACHE_TTL_MINUTES = int(os.getenv('CACHE_TTL_MINUTES', 5))

DATA_DIR = Path(os.getenv('DATA_DIR', BASE_DIR / 'data'))
MEMES_FILE = Path(os.getenv('MEMES_FILE', DATA_DIR / 'memes.json'))
IMAGES_DIR = Path(os.getenv('IMAGES_DIR', BASE_DIR / 'public' / 'images'))
MAX_CONTENT_LENGTH = int(os.getenv('MAX_UPLOAD_BYTES', 5 * 1024 * 1024))

LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'true').lower() in ('1', 'true', 'yes')

RATELIMIT_ENABLED = os.getenv('RATELIMIT_ENABLED', 'true').lower() in ('1', 'true', 'yes')
RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '2000 per day;100 per hour')
RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
WEATHER_RATE_LIMIT = os.getenv('WEATHER_RATE_LIMIT', '30 per minute')

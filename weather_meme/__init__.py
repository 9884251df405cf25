import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics

from .errors import register_error_handlers
from .extensions import cors, limiter
from .routes import images_bp, memes_bp, service_bp, weather_bp
from .services.meme_catalog import MemeCatalog
from .utils.cache import WeatherCache

__version__ = '1.0.0'


def setup_logging(app):
    """Configure logging system"""
    app.logger.setLevel(logging.INFO)

    if not app.config['LOG_TO_FILE']:
        return

    if not os.path.exists(app.config['LOG_DIR']):
        os.makedirs(app.config['LOG_DIR'])

    log_file = os.path.join(app.config['LOG_DIR'], 'weather_meme.log')

    handler = RotatingFileHandler(
        log_file, maxBytes=1000000, backupCount=5
    )
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))

    app.logger.addHandler(handler)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)

    setup_logging(app)

    cors.init_app(
        app,
        origins=[app.config['FRONTEND_URL']],
        supports_credentials=True
    )
    # Limiter общий для всех приложений процесса: счётчики начинаются с нуля
    limiter.init_app(app)
    if app.config['RATELIMIT_ENABLED']:
        limiter.reset()

    metrics = PrometheusMetrics(app, registry=CollectorRegistry())
    metrics.info('app_info', 'Weather Meme Service Info', version=__version__)

    app.extensions['weather_cache'] = WeatherCache(ttl_minutes=app.config['CACHE_TTL_MINUTES'])
    app.extensions['meme_catalog'] = MemeCatalog(app.config['MEMES_FILE'], app.config['IMAGES_DIR'])

    register_error_handlers(app)

    # Регистрация Blueprint
    app.register_blueprint(weather_bp)
    app.register_blueprint(memes_bp)
    app.register_blueprint(images_bp)
    app.register_blueprint(service_bp)

    app.logger.info(f"Memes catalog at {app.config['MEMES_FILE']}, images in {app.config['IMAGES_DIR']}")
    return app

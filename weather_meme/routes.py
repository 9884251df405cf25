import os
from datetime import datetime

from flask import Blueprint, current_app, jsonify, send_from_directory

from weather_meme.errors import APIError, ServerError
from weather_meme.extensions import limiter
from weather_meme.services.weather_api import WeatherAPI
from weather_meme.utils.validation import validate_city, validate_meme_index, validate_meme_upload

weather_bp = Blueprint('weather', __name__)
memes_bp = Blueprint('memes', __name__)
images_bp = Blueprint('images', __name__)
service_bp = Blueprint('service', __name__)

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png')


def weather_cache():
    return current_app.extensions['weather_cache']


def meme_catalog():
    return current_app.extensions['meme_catalog']


@weather_bp.route('/weather', methods=['GET'])
@validate_city
@limiter.limit(lambda: current_app.config['WEATHER_RATE_LIMIT'])
def get_weather(city):
    cache = weather_cache()

    cached = cache.get(city)
    if cached is not None:
        current_app.logger.info(f"Cache hit for {city!r}")
        return jsonify(cached)

    try:
        api = WeatherAPI()
        data = api.fetch(city)
        result = api.extract_weather_info(
            data,
            current_app.config['BASE_URL'],
            current_app.config['MEMES_FILE']
        )
    except APIError:
        raise
    except Exception:
        current_app.logger.error(f"Unexpected error for city {city!r}", exc_info=True)
        raise ServerError('Ошибка сервера')

    cache.set(city, result)
    return jsonify(result)


@memes_bp.route('/memes', methods=['POST'])
@validate_meme_upload
def create_meme(category, text, image):
    catalog = meme_catalog()
    image_path = catalog.save_image(image)

    try:
        catalog.add(category, image_path, text)
    except APIError:
        catalog.delete_image(image_path)
        raise

    return jsonify({"success": True, "message": "Мем добавлен", "imagePath": image_path})


@memes_bp.route('/memes/<category>/<index>', methods=['DELETE'])
@validate_meme_index
def delete_meme(category, index):
    meme_catalog().remove(category, index)
    return jsonify({"success": True, "message": "Мем удалён"})


@memes_bp.route('/memes-list', methods=['GET'])
def list_memes():
    try:
        return jsonify(meme_catalog().load())
    except APIError:
        raise ServerError('Ошибка загрузки мемов')


@images_bp.route('/images/<path:filename>', methods=['GET'])
def serve_image(filename):
    response = send_from_directory(current_app.config['IMAGES_DIR'], filename)
    if os.path.splitext(filename)[1].lower() in IMAGE_EXTENSIONS:
        response.headers['Access-Control-Allow-Origin'] = current_app.config['FRONTEND_URL']
    return response


@service_bp.route('/health')
def health_check():
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "cache_size": len(weather_cache())
    })


@service_bp.route('/docs')
def api_docs():
    return jsonify({
        "endpoints": {
            "GET /weather": {
                "description": "Current weather for a city with a meme for its temperature",
                "parameters": {"city": "City name (required)"},
                "rate_limit": current_app.config['WEATHER_RATE_LIMIT']
            },
            "POST /memes": {
                "description": "Add a meme (multipart form)",
                "parameters": {
                    "category": "hot | warm | normal | cool | cold",
                    "text": "Caption",
                    "image": "Image file"
                }
            },
            "DELETE /memes/<category>/<index>": {
                "description": "Delete a meme and its image"
            },
            "GET /memes-list": {
                "description": "Full meme catalog"
            },
            "/health": {
                "description": "Service health check"
            },
            "/docs": {
                "description": "API documentation"
            }
        }
    })

from flask import jsonify


class APIError(Exception):
    """Ошибка, которая отдаётся клиенту как JSON {"error": message}"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(APIError):
    status_code = 400


class NotFound(APIError):
    status_code = 404


class ServerError(APIError):
    status_code = 500


class CityNotFound(NotFound):
    def __init__(self, message: str = 'Город не найден'):
        super().__init__(message)


class UpstreamError(ServerError):
    def __init__(self, message: str = 'Ошибка сервера'):
        super().__init__(message)


class MemeNotFound(NotFound):
    def __init__(self, message: str = 'Мем не найден'):
        super().__init__(message)


class CatalogError(ServerError):
    def __init__(self, message: str = 'Ошибка сервера'):
        super().__init__(message)


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def api_error_handler(e):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(413)
    def too_large_handler(e):
        return jsonify({
            "error": "Файл слишком большой",
            "message": str(e.description)
        }), 413

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({
            "error": "Rate limit exceeded",
            "message": str(e.description)
        }), 429

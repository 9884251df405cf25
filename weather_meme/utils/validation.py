from functools import wraps

from flask import request

from weather_meme.errors import BadRequest
from weather_meme.utils.memes import CATEGORIES


def validate_city(f):
    """
    Декоратор для проверки параметра city в запросе.
    Передаёт в обработчик название города без изменений регистра.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        city = request.args.get('city', '')

        if not city.strip():
            raise BadRequest('Город не указан')

        return f(*args, city=city, **kwargs)

    return wrapper


def validate_meme_upload(f):
    """
    Декоратор для проверки multipart-формы нового мема.
    Требует category, text и файл image с mimetype image/*.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        category = request.form.get('category', '').strip()
        text = request.form.get('text', '')
        image = request.files.get('image')

        # Файлы не-картинки отбрасываются так же, как отсутствующие
        if image is not None and not (image.filename and image.mimetype.startswith('image/')):
            image = None

        if not category or not text or image is None:
            raise BadRequest('Категория, текст и изображение обязательны')

        if category not in CATEGORIES:
            raise BadRequest('Неизвестная категория')

        return f(*args, category=category, text=text, image=image, **kwargs)

    return wrapper


def validate_meme_index(f):
    """
    Декоратор для проверки индекса мема в пути.
    """

    @wraps(f)
    def wrapper(*args, index, **kwargs):
        try:
            index = int(index)
        except ValueError:
            raise BadRequest('Неверный индекс') from None

        return f(*args, index=index, **kwargs)

    return wrapper

import json
import logging
import os
import re
import time
from pathlib import Path
from typing import Dict, List, Union

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from weather_meme.errors import CatalogError, MemeNotFound

logger = logging.getLogger(__name__)

IMAGES_URL_PREFIX = '/images/'
EXTENSION_RE = re.compile(r'\.[a-z0-9]+')


class MemeCatalog:
    """Каталог мемов в JSON-файле и картинки на диске.

    Каждая операция читает файл целиком и перезаписывает его;
    блокировок нет, параллельные записи могут потерять изменения.
    """

    def __init__(self, memes_file: Union[str, Path], images_dir: Union[str, Path]):
        self.memes_file = Path(memes_file)
        self.images_dir = Path(images_dir)

    def load(self) -> Dict[str, List[dict]]:
        """Чтение каталога; отсутствующий файл считается пустым каталогом"""
        if not self.memes_file.exists():
            return {}

        try:
            with open(self.memes_file, 'r', encoding='utf-8') as f:
                catalog = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading memes catalog {self.memes_file}: {e}")
            raise CatalogError() from e

        if not isinstance(catalog, dict):
            logger.error(f"Memes catalog {self.memes_file} is not a JSON object")
            raise CatalogError()
        return catalog

    def save(self, catalog: Dict[str, List[dict]]):
        """Запись каталога целиком"""
        try:
            self.memes_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.memes_file, 'w', encoding='utf-8') as f:
                json.dump(catalog, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error writing memes catalog {self.memes_file}: {e}")
            raise CatalogError() from e

    def add(self, category: str, image_path: str, text: str) -> dict:
        catalog = self.load()
        entry = {'image': image_path, 'text': text}
        catalog.setdefault(category, []).append(entry)
        self.save(catalog)
        logger.info(f"Meme added to {category!r}: {image_path}")
        return entry

    def remove(self, category: str, index: int) -> dict:
        """
        Удаление мема и его картинки

        Raises:
            MemeNotFound: Если нет такой категории или индекс вне диапазона
        """
        catalog = self.load()
        memes = catalog.get(category)
        if not memes or not 0 <= index < len(memes):
            raise MemeNotFound()

        entry = memes[index]
        image_path = entry.get('image') if isinstance(entry, dict) else None
        if isinstance(image_path, str):
            self.delete_image(image_path)
        else:
            logger.warning(f"Meme {index} in {category!r} has no image path: {entry!r}")

        del memes[index]
        self.save(catalog)
        logger.info(f"Meme {index} removed from {category!r}")
        return entry

    def save_image(self, image: FileStorage) -> str:
        """Сохранение загруженной картинки, возвращает относительный путь /images/<имя>"""
        # Расширение из исходного имени, только латиница и цифры
        ext = os.path.splitext(image.filename or '')[1].lower()
        if not EXTENSION_RE.fullmatch(ext):
            ext = ''
        filename = f"{int(time.time() * 1000)}{ext}"

        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            image.save(self.images_dir / filename)
        except OSError as e:
            logger.error(f"Error saving image {filename}: {e}")
            raise CatalogError() from e

        return IMAGES_URL_PREFIX + filename

    def delete_image(self, image_path: str) -> bool:
        """Удаление файла картинки; ошибки только логируются"""
        if not image_path.startswith(IMAGES_URL_PREFIX):
            return False

        name = secure_filename(image_path[len(IMAGES_URL_PREFIX):])
        if not name:
            return False

        full_path = self.images_dir / name
        try:
            if full_path.exists():
                full_path.unlink()
                return True
        except OSError as e:
            logger.warning(f"Failed to delete image {full_path}: {e}")
        return False

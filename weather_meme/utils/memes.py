import json
import logging
import random
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

CATEGORIES = ('hot', 'warm', 'normal', 'cool', 'cold')
DEFAULT_CATEGORY = 'normal'


def classify_temperature(temp: int) -> str:
    """
    Map a rounded temperature to its meme category.

    Args:
        temp: Temperature in Celsius, already rounded

    Returns:
        One of "hot", "warm", "normal", "cool", "cold"
    """
    if temp >= 30:
        return 'hot'
    if temp >= 20:
        return 'warm'
    if temp >= 10:
        return 'normal'
    if temp >= 0:
        return 'cool'
    return 'cold'


def get_meme_by_temp(
        temp: int,
        base_url: str,
        memes_file: Union[str, Path]
) -> Optional[dict]:
    """
    Pick a random meme for the temperature band.

    Falls back to the "normal" list when the band has no memes.

    Args:
        temp: Temperature in Celsius, already rounded
        base_url: Prefix for the relative image path, e.g. "http://localhost:5000"
        memes_file: Path to the JSON catalog

    Returns:
        Copy of the chosen entry with an absolute image URL, or None if the
        catalog can't be read or has nothing to offer
    """
    try:
        with open(memes_file, 'r', encoding='utf-8') as f:
            memes_data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read memes catalog {memes_file}: {e}")
        return None

    if not isinstance(memes_data, dict):
        logger.error(f"Memes catalog {memes_file} is not a JSON object")
        return None

    category = classify_temperature(temp)
    memes = memes_data.get(category) or memes_data.get(DEFAULT_CATEGORY) or []
    if not memes:
        return None

    meme = dict(random.choice(memes))
    meme['image'] = base_url + meme.get('image', '')
    return meme

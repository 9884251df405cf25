from datetime import datetime, timedelta
from typing import Callable, Dict, Optional


class WeatherCache:
    """In-memory weather cache keyed by city name.

    Expired entries are ignored on read and replaced on the next
    successful fetch; nothing is ever evicted.
    """

    def __init__(self, ttl_minutes: int = 5, clock: Callable[[], datetime] = datetime.now):
        self.ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock
        self._entries: Dict[str, dict] = {}

    def get(self, city: str) -> Optional[Dict]:
        entry = self._entries.get(city)
        if entry is None:
            return None

        if self._clock() - entry['timestamp'] < self.ttl:
            return entry['data']
        return None

    def set(self, city: str, data: Dict):
        self._entries[city] = {'data': data, 'timestamp': self._clock()}

    def __len__(self):
        return len(self._entries)

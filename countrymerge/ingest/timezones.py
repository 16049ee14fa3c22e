"""
Timezone directory loader.

Input is a mapping from timezone code to a timezone object whose
details.country_code links it to a country.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .base import BaseLoader

logger = logging.getLogger(__name__)


class Loader(BaseLoader):
    """Timezone directory loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('timezones', path)

    def parse(self, data: Any) -> Optional[Dict[str, Dict]]:
        if not isinstance(data, dict):
            return None

        timezones = {}
        for tz_code, timezone in data.items():
            if not isinstance(timezone, dict):
                logger.debug(f"Skipping malformed timezone entry: {tz_code}")
                continue
            timezones[tz_code] = timezone
        return timezones

    def empty(self) -> Dict[str, Dict]:
        return {}

"""
Base country list loader.

Reads the countries+states+cities dataset from a local file, or downloads
it from GitHub when no local copy exists and caches it locally.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from tqdm import tqdm

from ..constants import COUNTRIES_URL, JSON_INDENT
from .base import BaseLoader, FetchError, SourceError

logger = logging.getLogger(__name__)


class Loader(BaseLoader):
    """Countries dataset loader (required source)."""

    required = True

    CHUNK_SIZE = 8192

    def __init__(self, path: Optional[Path] = None, url: str = COUNTRIES_URL,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        super().__init__('countries', path)
        self.url = url
        self.timeout = timeout
        # Created on demand when no session is given
        self.session = session

    def fetch(self) -> Any:
        """
        Download the countries dataset.

        Raises:
            FetchError: On network, HTTP or JSON errors
        """
        if self.session is not None:
            return self._download(self.session)

        with requests.Session() as session:
            return self._download(session)

    def _download(self, session: requests.Session) -> Any:
        logger.info(f"Fetching countries data from {self.url}")
        session.headers.update({
            'User-Agent': 'countrymerge/1.0',
        })

        try:
            with session.get(self.url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()

                total_size = int(response.headers.get('content-length', 0))
                chunks = []
                with tqdm(total=total_size or None, unit='B', unit_scale=True,
                          desc='Downloading countries') as pbar:
                    for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                        chunks.append(chunk)
                        pbar.update(len(chunk))

            return json.loads(b''.join(chunks).decode('utf-8'))

        except requests.exceptions.RequestException as e:
            raise FetchError(f"Failed to fetch data: {e}") from e
        except ValueError as e:
            raise FetchError(f"Failed to parse JSON: {e}") from e

    def cache(self, data: List[Dict]) -> None:
        """Save a fetched copy next to the other sources."""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=JSON_INDENT, ensure_ascii=False)
            logger.info(f"Cached countries data to {self.path}")
        except OSError as e:
            logger.error(f"Error writing to {self.path}: {e}")

    def parse(self, data: Any) -> Optional[List]:
        if not isinstance(data, list):
            return None
        return data

    def empty(self) -> List:
        return []

    def load(self) -> List[Dict]:
        if self.exists():
            logger.info(f"Reading countries data from local file {self.path}")
            return super().load()

        data = self.fetch()
        countries = self.parse(data)
        if countries is None:
            raise SourceError("countries: countries data is not in the expected format")
        self.cache(countries)
        logger.info(f"Loaded countries with {len(countries)} entries")
        return countries

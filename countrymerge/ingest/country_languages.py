"""
Country-language mapping loader.

Accepts either an array of {countryCode, languageCode} objects or a mapping
from country code to a language code or list of language codes. Both become
an ordered list of (country_code, language_code) pairs, lowercased.
Duplicates are kept; the merge stage ignores them.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ..normalize.codes import normalize_code
from .base import BaseLoader

logger = logging.getLogger(__name__)

Pair = Tuple[str, str]


class Loader(BaseLoader):
    """Country-language mapping loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('country-language mapping', path)

    def parse(self, data: Any) -> Optional[List[Pair]]:
        if isinstance(data, list):
            return [
                (normalize_code(item.get('countryCode')), normalize_code(item.get('languageCode')))
                for item in data
                if isinstance(item, dict)
            ]

        if isinstance(data, dict):
            pairs = []
            for country_code, language_codes in data.items():
                country_code = normalize_code(country_code)
                if isinstance(language_codes, str):
                    language_codes = [language_codes]
                elif not isinstance(language_codes, list):
                    logger.debug(f"Skipping mapping for {country_code}: {language_codes!r}")
                    continue
                for language_code in language_codes:
                    pairs.append((country_code, normalize_code(language_code)))
            return pairs

        return None

    def empty(self) -> List[Pair]:
        return []

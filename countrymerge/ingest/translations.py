"""
Translation patch loaders.

Two sources describe supplemental per-country translations:
- country patch fragments: one country per (possibly truncated) file
- the supplemental translations file: an array of country patches

Both are converted to the same canonical patch shape:
    {'code': 'us', 'translations': [...], 'nativeLanguageCode': ..., 'nativeName': ...}
'translations' is only present when the source carried translations.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..normalize.codes import normalize_code
from ..normalize.countries import translations_to_list
from .base import BaseLoader, FragmentLoader

logger = logging.getLogger(__name__)


def to_patch(data: Dict) -> Optional[Dict]:
    """Convert a raw country translation record to a canonical patch."""
    code = normalize_code(data.get('code'))
    if not code:
        return None

    patch = {'code': code}
    if isinstance(data.get('translations'), (dict, list)):
        patch['translations'] = translations_to_list(data['translations'])
    if data.get('nativeLanguageCode'):
        patch['nativeLanguageCode'] = normalize_code(data['nativeLanguageCode'])
    if data.get('nativeName'):
        patch['nativeName'] = data['nativeName']
    return patch


class PatchLoader(FragmentLoader):
    """Single-country patch fragment loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('country patch', path)

    def parse(self, data: Dict) -> List[Dict]:
        patch = to_patch(data)
        if patch is None:
            logger.warning(f"Country patch {self.path.name} has no code, ignoring")
            return []
        return [patch]

    def empty(self) -> List[Dict]:
        return []


class Loader(BaseLoader):
    """Supplemental translations file loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('translations', path)

    def parse(self, data: Any) -> Optional[List[Dict]]:
        if not isinstance(data, list):
            return None

        patches = []
        for item in data:
            if not isinstance(item, dict) or item.get('translations') is None:
                logger.debug(f"Skipping translation record without translations: {item!r:.80}")
                continue
            patch = to_patch(item)
            if patch is None:
                logger.debug(f"Skipping translation record without code: {item!r:.80}")
                continue
            patches.append(patch)
        return patches

    def empty(self) -> List[Dict]:
        return []


def load_translation_patches(patch_paths: Iterable[Path],
                             translations_path: Optional[Path]) -> List[Dict]:
    """Load country patch fragments followed by the supplemental translations file."""
    patches = []
    for path in patch_paths:
        patches.extend(PatchLoader(path).load())
    patches.extend(Loader(translations_path).load())
    return patches

"""
Language directory loader.

Accepts either an array of language objects with a 'code' field or a
mapping from language code to language object. Both become a dict keyed
by lowercase code. Single-language patch fragments are folded in on top.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from ..normalize.codes import normalize_code
from .base import BaseLoader, FragmentLoader

logger = logging.getLogger(__name__)


def language_entry(code: Any, data: Dict) -> Optional[Dict]:
    """Build a LanguageEntry with a normalized code, or None if code is empty."""
    code = normalize_code(code)
    if not code:
        return None
    return {**data, 'code': code}


class Loader(BaseLoader):
    """Language directory loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('languages', path)

    def parse(self, data: Any) -> Optional[Dict[str, Dict]]:
        if isinstance(data, list):
            items = [(lang.get('code'), lang) for lang in data if isinstance(lang, dict)]
        elif isinstance(data, dict):
            items = [(code, lang) for code, lang in data.items() if isinstance(lang, dict)]
        else:
            return None

        languages = {}
        for code, lang in items:
            entry = language_entry(code, lang)
            if entry is None:
                logger.debug(f"Skipping language without code: {lang}")
                continue
            languages[entry['code']] = entry
        return languages

    def empty(self) -> Dict[str, Dict]:
        return {}


class PatchLoader(FragmentLoader):
    """Single-language patch fragment loader."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__('language patch', path)

    def parse(self, data: Dict) -> Dict[str, Dict]:
        entry = language_entry(data.get('code'), data)
        if entry is None:
            logger.warning(f"Language patch {self.path.name} has no code, ignoring")
            return {}
        return {entry['code']: entry}

    def empty(self) -> Dict[str, Dict]:
        return {}


def apply_language_patches(languages: Dict[str, Dict],
                           patches: Iterable[Dict[str, Dict]]) -> Dict[str, Dict]:
    """Return a new language table with patch entries replacing same-code entries."""
    patched = dict(languages)
    for patch in patches:
        patched.update(patch)
    return patched


def load_languages(path: Optional[Path], patch_paths: Iterable[Path] = ()) -> Dict[str, Dict]:
    """Load the language directory and apply language patch fragments."""
    languages = Loader(path).load()
    patches = [PatchLoader(p).load() for p in patch_paths]
    return apply_language_patches(languages, patches)

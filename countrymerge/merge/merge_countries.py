"""
Merge timezones, languages and translation patches into country records.

Each pass takes the country map and returns a new one; records that a pass
changes are shallow-copied, so the input map is never modified. Every pass
is idempotent:

1. Timezones: replace each country's timezone list with its group
2. Languages: append language descriptors, first occurrence per code wins
3. Translations: merge patch translations by language code, patch wins
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..normalize.codes import normalize_code

logger = logging.getLogger(__name__)

Countries = Dict[str, Dict]


def timezone_country_code(timezone: Dict) -> str:
    """Lowercase country code embedded in a timezone, or ''."""
    details = timezone.get('details')
    if not isinstance(details, dict):
        return ''
    return normalize_code(details.get('country_code'))


def group_timezones(timezones: Dict[str, Dict]) -> Dict[str, List[Dict]]:
    """
    Group timezones by country code.

    Each entry is the full timezone object with its code added as 'tzCode'.
    Timezones without a country code are left out.
    """
    grouped = {}
    for tz_code, timezone in timezones.items():
        country_code = timezone_country_code(timezone)
        if not country_code:
            continue
        grouped.setdefault(country_code, []).append({'tzCode': tz_code, **timezone})
    return grouped


def apply_timezones(countries: Countries, timezones_by_country: Dict[str, List[Dict]]) -> Countries:
    """Set each known country's timezones to its group (replacing, not appending)."""
    merged = dict(countries)
    matched = 0
    for country_code, timezones in timezones_by_country.items():
        if country_code in merged:
            merged[country_code] = {**merged[country_code], 'timezones': list(timezones)}
            matched += 1
    logger.info(f"Assigned timezones to {matched} countries")
    return merged


def language_descriptor(code: str, language: Dict) -> Dict:
    """Language descriptor embedded in a country record."""
    name = language.get('name') or ''
    return {
        'code': code,
        'name': name,
        'nativeName': language.get('nativeName') or name,
        'translations': language.get('translations') or [],
    }


def apply_languages(countries: Countries, languages: Dict[str, Dict],
                    mapping: Iterable[Tuple[str, str]]) -> Countries:
    """
    Attach languages to countries from (country_code, language_code) pairs.

    Pairs naming an unknown country or language are ignored. A country never
    holds two descriptors with the same code; the first one is kept.
    """
    merged = dict(countries)
    copied = set()
    added = 0

    for country_code, language_code in mapping:
        country_code = normalize_code(country_code)
        language_code = normalize_code(language_code)
        if not country_code or not language_code or country_code not in merged:
            continue

        language = languages.get(language_code)
        if language is None:
            continue

        record = merged[country_code]
        existing = record.get('languages') or []
        if any(normalize_code(lang.get('code')) == language_code for lang in existing):
            continue

        if country_code not in copied:
            record = {**record, 'languages': list(existing)}
            merged[country_code] = record
            copied.add(country_code)
        record['languages'].append(language_descriptor(language_code, language))
        added += 1

    logger.info(f"Added {added} country languages")
    return merged


def merge_translations(existing: List[Dict], new: List[Dict]) -> List[Dict]:
    """
    Merge two translation lists keyed by language code.

    Order is existing-then-new; a new entry sharing a code with an existing
    one takes that entry's place. Entries without a languageCode are dropped.

    Examples:
        >>> merge_translations([{'languageCode': 'fr', 'name': 'A'}],
        ...                    [{'languageCode': 'fr', 'name': 'B'}])
        [{'languageCode': 'fr', 'name': 'B'}]
    """
    by_code = {}
    for translation in list(existing) + list(new):
        code = normalize_code(translation.get('languageCode'))
        if code:
            by_code[code] = translation
    return list(by_code.values())


def apply_translation_patch(record: Dict, patch: Dict) -> Dict:
    """Return a copy of record with the patch applied."""
    patched = dict(record)
    if 'translations' in patch:
        patched['translations'] = merge_translations(record.get('translations') or [],
                                                     patch['translations'])
    if patch.get('nativeLanguageCode'):
        patched['nativeLanguageCode'] = normalize_code(patch['nativeLanguageCode'])
    if patch.get('nativeName'):
        patched['nativeName'] = patch['nativeName']
    return patched


def apply_translation_patches(countries: Countries, patches: Iterable[Dict]) -> Countries:
    """Apply translation patches in order. Patches for unknown countries are dropped."""
    merged = dict(countries)
    applied = 0
    for patch in patches:
        code = normalize_code(patch.get('code'))
        if code not in merged:
            logger.debug(f"Dropping translation patch for unknown country '{code}'")
            continue
        merged[code] = apply_translation_patch(merged[code], patch)
        applied += 1
    logger.info(f"Applied {applied} translation patches")
    return merged


def merge_countries(countries: Countries,
                    timezones: Optional[Dict[str, Dict]] = None,
                    languages: Optional[Dict[str, Dict]] = None,
                    mapping: Iterable[Tuple[str, str]] = (),
                    patches: Iterable[Dict] = ()) -> Countries:
    """Run the timezone, language and translation passes in order."""
    merged = apply_timezones(countries, group_timezones(timezones or {}))
    merged = apply_languages(merged, languages or {}, mapping)
    merged = apply_translation_patches(merged, patches)
    return merged

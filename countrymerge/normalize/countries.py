"""
Country record builder.

Converts raw entries of the base country list into canonical country
records keyed by lowercase ISO2 code:

- all source fields are passed through untouched
- iso2/iso3 are lowercased
- translations become an ordered list of {languageCode, name}
- languages and timezones start empty (filled by the merge stage)
"""

import logging
from typing import Any, Dict, Iterable, List

from ..constants import DUPLICATE_FIRST, DUPLICATE_LAST, DUPLICATE_POLICY
from .codes import normalize_code

logger = logging.getLogger(__name__)


def translations_to_list(translations: Any) -> List[Dict]:
    """
    Convert translations to the ordered list form.

    A mapping of language code to name keeps its iteration order. A list
    keeps the entries that carry a languageCode. Anything else is empty.

    Examples:
        >>> translations_to_list({'fr': 'États-Unis', 'de': 'USA'})
        [{'languageCode': 'fr', 'name': 'États-Unis'}, {'languageCode': 'de', 'name': 'USA'}]
    """
    if isinstance(translations, dict):
        return [{'languageCode': code, 'name': name} for code, name in translations.items()
                if normalize_code(code)]
    if isinstance(translations, list):
        return [t for t in translations if isinstance(t, dict) and normalize_code(t.get('languageCode'))]
    return []


def build_country_record(entry: Dict) -> Dict:
    """Build one canonical record from a raw country entry."""
    return {
        **entry,
        'iso2': normalize_code(entry.get('iso2')),
        'iso3': normalize_code(entry.get('iso3')),
        'languages': [],
        'timezones': [],
        'translations': translations_to_list(entry.get('translations')),
    }


def build_country_records(entries: Iterable[Any],
                          duplicate_policy: str = DUPLICATE_POLICY) -> Dict[str, Dict]:
    """
    Build the country map from the base country list.

    Args:
        entries: Raw country entries
        duplicate_policy: How to resolve entries sharing a normalized ISO2
            code. 'last' keeps the later entry, 'first' keeps the earlier
            one. Either way the code keeps its first position in the map.

    Returns:
        Dict mapping lowercase ISO2 code to country record
    """
    if duplicate_policy not in (DUPLICATE_FIRST, DUPLICATE_LAST):
        raise ValueError(f"Invalid duplicate policy: {duplicate_policy!r}")

    countries = {}
    skipped = 0

    for entry in entries:
        if not isinstance(entry, dict) or not entry.get('iso2'):
            skipped += 1
            continue

        record = build_country_record(entry)
        iso2 = record['iso2']
        if not iso2:
            # iso2 present but not a string
            skipped += 1
            continue

        if iso2 in countries:
            logger.warning(f"Duplicate country code '{iso2}', keeping {duplicate_policy} entry")
            if duplicate_policy == DUPLICATE_FIRST:
                continue

        countries[iso2] = record

    if skipped:
        logger.debug(f"Skipped {skipped} country entries without an ISO2 code")

    logger.info(f"Built {len(countries)} country records")
    return countries

"""
Derived views of the merged country data.

Every view is a fresh list of new dicts built from the merged records;
records are never edited in place, so building one view can't affect
another.
"""

from typing import Any, Dict, Iterable, List

from ..merge.merge_countries import group_timezones, timezone_country_code


def without_fields(record: Dict, *fields: str) -> Dict:
    """Copy of record without the given top-level fields."""
    return {k: v for k, v in record.items() if k not in fields}


def has_states(country: Dict) -> bool:
    return bool(country.get('states'))


def has_cities(country: Dict) -> bool:
    """True if the country has at least one state with at least one city."""
    return has_states(country) and any(
        isinstance(state, dict) and state.get('cities') for state in country['states']
    )


def has_translations(country: Dict) -> bool:
    return bool(country.get('translations'))


def has_languages(country: Dict) -> bool:
    return bool(country.get('languages'))


def simple(countries: Iterable[Dict]) -> List[Dict]:
    """Countries without states or translations."""
    return [without_fields(c, 'states', 'translations') for c in countries]


def with_translations(countries: Iterable[Dict]) -> List[Dict]:
    """Countries without states, translations kept."""
    return [without_fields(c, 'states') for c in countries]


def with_states(countries: Iterable[Dict]) -> List[Dict]:
    """Countries that have states, with cities stripped from each state."""
    return [
        {**c, 'states': [without_fields(s, 'cities') if isinstance(s, dict) else s
                         for s in c['states']]}
        for c in countries
        if has_states(c)
    ]


def with_states_cities(countries: Iterable[Dict]) -> List[Dict]:
    """Countries with at least one state holding at least one city."""
    return [dict(c) for c in countries if has_cities(c)]


def complete(countries: Iterable[Dict]) -> List[Dict]:
    """Countries with states, cities and translations."""
    return [dict(c) for c in countries if has_cities(c) and has_translations(c)]


def with_languages(countries: Iterable[Dict]) -> List[Dict]:
    return [dict(c) for c in countries if has_languages(c)]


def without_languages(countries: Iterable[Dict]) -> List[Dict]:
    return [dict(c) for c in countries if not has_languages(c)]


def timezones_by_country(timezones: Dict[str, Dict]) -> Dict[str, List[Dict]]:
    """All timezones grouped by country code, including countries not in the base list."""
    return group_timezones(timezones)


def all_timezones(timezones: Dict[str, Dict]) -> List[Dict]:
    """Every timezone, with tzCode and a top-level country_code (None if unknown)."""
    return [
        {
            'tzCode': tz_code,
            **timezone,
            'country_code': timezone_country_code(timezone) or None,
        }
        for tz_code, timezone in timezones.items()
    ]


def build_views(countries: Dict[str, Dict], timezones: Dict[str, Dict],
                currencies: Dict[str, Dict]) -> Dict[str, Any]:
    """
    Build every output view.

    Args:
        countries: Merged country map
        timezones: Timezone directory
        currencies: Currency index from aggregate_currencies

    Returns:
        Dict mapping output name to view data
    """
    records = list(countries.values())
    return {
        'merged-data': records,
        'timezones-by-country': timezones_by_country(timezones),
        'currencies-by-country': currencies,
        'all-timezones': all_timezones(timezones),
        'all-currencies': list(currencies.values()),
        'countries-simple': simple(records),
        'countries-with-translations': with_translations(records),
        'countries-with-states': with_states(records),
        'countries-with-states-cities': with_states_cities(records),
        'countries-complete': complete(records),
        'countries-with-languages': with_languages(records),
        'countries-without-languages': without_languages(records),
    }

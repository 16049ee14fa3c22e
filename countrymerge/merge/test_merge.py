#!/usr/bin/env python3
"""
Tests for the merge passes and currency aggregation.
"""

import copy

import pytest

from countrymerge.merge.currencies import aggregate_currencies
from countrymerge.merge.merge_countries import (
    apply_languages,
    apply_timezones,
    apply_translation_patches,
    group_timezones,
    merge_countries,
    merge_translations,
)
from countrymerge.normalize.countries import build_country_records


def create_sample_countries():
    """Country map built from a small base list."""
    return build_country_records([
        {
            'iso2': 'US',
            'iso3': 'USA',
            'name': 'United States',
            'currency': 'USD',
            'currency_name': 'United States dollar',
            'currency_symbol': '$',
            'translations': {'fr': 'États-Unis', 'es': 'Estados Unidos'},
        },
        {
            'iso2': 'CA',
            'iso3': 'CAN',
            'name': 'Canada',
            'currency': 'cad',
        },
        {
            'iso2': 'EC',
            'iso3': 'ECU',
            'name': 'Ecuador',
            'currency': 'usd',
            'currency_name': 'US Dollar (Ecuador)',
        },
    ])


def create_sample_timezones():
    return {
        'America/New_York': {'details': {'country_code': 'US'}, 'utc': '-05:00'},
        'America/Chicago': {'details': {'country_code': 'us'}, 'utc': '-06:00'},
        'America/Toronto': {'details': {'country_code': 'CA'}, 'utc': '-05:00'},
        'Europe/Paris': {'details': {'country_code': 'FR'}, 'utc': '+01:00'},
        'Etc/UTC': {'details': {}},
        'Etc/Unknown': {},
    }


def create_sample_languages():
    return {
        'en': {'code': 'en', 'name': 'English', 'nativeName': 'English'},
        'fr': {'code': 'fr', 'name': 'French', 'nativeName': 'Français',
               'translations': [{'languageCode': 'de', 'name': 'Französisch'}]},
        'es': {'code': 'es', 'name': 'Spanish'},
    }


# Timezones

def test_group_timezones():
    grouped = group_timezones(create_sample_timezones())

    assert list(grouped) == ['us', 'ca', 'fr']
    assert [tz['tzCode'] for tz in grouped['us']] == ['America/New_York', 'America/Chicago']
    assert grouped['us'][0]['utc'] == '-05:00'
    assert grouped['us'][0]['details'] == {'country_code': 'US'}


def test_apply_timezones():
    countries = create_sample_countries()
    merged = apply_timezones(countries, group_timezones(create_sample_timezones()))

    assert [tz['tzCode'] for tz in merged['us']['timezones']] == ['America/New_York', 'America/Chicago']
    assert [tz['tzCode'] for tz in merged['ca']['timezones']] == ['America/Toronto']
    # No matching group
    assert merged['ec']['timezones'] == []
    # Unknown country groups are ignored
    assert 'fr' not in merged


def test_apply_timezones_idempotent():
    grouped = group_timezones(create_sample_timezones())
    once = apply_timezones(create_sample_countries(), grouped)
    twice = apply_timezones(once, grouped)

    assert twice == once
    assert len(twice['us']['timezones']) == 2


def test_apply_timezones_does_not_mutate_input():
    countries = create_sample_countries()
    snapshot = copy.deepcopy(countries)

    apply_timezones(countries, group_timezones(create_sample_timezones()))

    assert countries == snapshot


# Languages

def test_apply_languages():
    countries = create_sample_countries()
    mapping = [('us', 'en'), ('us', 'es'), ('ca', 'en'), ('ca', 'fr')]

    merged = apply_languages(countries, create_sample_languages(), mapping)

    assert [lang['code'] for lang in merged['us']['languages']] == ['en', 'es']
    assert [lang['code'] for lang in merged['ca']['languages']] == ['en', 'fr']
    assert merged['ec']['languages'] == []

    french = merged['ca']['languages'][1]
    assert french == {
        'code': 'fr',
        'name': 'French',
        'nativeName': 'Français',
        'translations': [{'languageCode': 'de', 'name': 'Französisch'}],
    }


def test_apply_languages_defaults():
    """nativeName falls back to name, translations to []."""
    merged = apply_languages(create_sample_countries(), create_sample_languages(), [('us', 'es')])

    assert merged['us']['languages'] == [
        {'code': 'es', 'name': 'Spanish', 'nativeName': 'Spanish', 'translations': []},
    ]


def test_apply_languages_dedup_mixed_case():
    mapping = [('us', 'en'), ('US', 'EN'), ('us', 'en')]

    merged = apply_languages(create_sample_countries(), create_sample_languages(), mapping)

    assert [lang['code'] for lang in merged['us']['languages']] == ['en']


def test_apply_languages_unknown_codes_ignored():
    mapping = [('xx', 'en'), ('us', 'tlh'), ('', 'en'), ('us', '')]

    merged = apply_languages(create_sample_countries(), create_sample_languages(), mapping)

    assert merged['us']['languages'] == []
    assert 'xx' not in merged


def test_apply_languages_idempotent():
    languages = create_sample_languages()
    mapping = [('us', 'en'), ('ca', 'fr')]

    once = apply_languages(create_sample_countries(), languages, mapping)
    twice = apply_languages(once, languages, mapping)

    assert twice == once


def test_apply_languages_does_not_mutate_input():
    countries = create_sample_countries()
    snapshot = copy.deepcopy(countries)

    apply_languages(countries, create_sample_languages(), [('us', 'en'), ('us', 'fr')])

    assert countries == snapshot


# Translations

def test_merge_translations_override_and_append():
    existing = [
        {'languageCode': 'fr', 'name': 'États-Unis'},
        {'languageCode': 'es', 'name': 'Estados Unidos'},
    ]
    new = [
        {'languageCode': 'de', 'name': 'Vereinigte Staaten'},
        {'languageCode': 'fr', 'name': 'USA-fr'},
    ]

    result = merge_translations(existing, new)

    assert result == [
        {'languageCode': 'fr', 'name': 'USA-fr'},
        {'languageCode': 'es', 'name': 'Estados Unidos'},
        {'languageCode': 'de', 'name': 'Vereinigte Staaten'},
    ]


def test_merge_translations_drops_entries_without_code():
    result = merge_translations([{'name': 'orphan'}], [{'languageCode': 'fr', 'name': 'A'}])
    assert result == [{'languageCode': 'fr', 'name': 'A'}]


def test_apply_translation_patches():
    patches = [
        {
            'code': 'us',
            'translations': [
                {'languageCode': 'fr', 'name': 'USA-fr'},
                {'languageCode': 'de', 'name': 'USA-de'},
            ],
            'nativeLanguageCode': 'EN',
            'nativeName': 'United States',
        },
        {'code': 'zz', 'translations': [{'languageCode': 'fr', 'name': 'Nowhere'}]},
    ]

    merged = apply_translation_patches(create_sample_countries(), patches)

    us = merged['us']
    assert [t for t in us['translations'] if t['languageCode'] == 'fr'] == [
        {'languageCode': 'fr', 'name': 'USA-fr'},
    ]
    assert [t['languageCode'] for t in us['translations']] == ['fr', 'es', 'de']
    assert us['nativeLanguageCode'] == 'en'
    assert us['nativeName'] == 'United States'
    # Patch for unknown country is dropped
    assert 'zz' not in merged


def test_apply_translation_patches_overwrite_native_fields():
    patches = [
        {'code': 'ca', 'nativeName': 'Canada', 'nativeLanguageCode': 'en'},
        {'code': 'CA', 'nativeName': 'Kanada', 'nativeLanguageCode': 'fr'},
    ]

    merged = apply_translation_patches(create_sample_countries(), patches)

    assert merged['ca']['nativeName'] == 'Kanada'
    assert merged['ca']['nativeLanguageCode'] == 'fr'
    # No translations in either patch
    assert merged['ca']['translations'] == []


def test_patch_does_not_change_existing_translation_set():
    """Built translations survive a patch that adds nothing new."""
    countries = build_country_records([{
        'iso2': 'US',
        'translations': [
            {'languageCode': 7, 'name': 'number'},
            {'languageCode': 'fr', 'name': 'États-Unis'},
        ],
    }])

    patched = apply_translation_patches(countries, [{'code': 'us', 'translations': []}])

    assert patched['us']['translations'] == countries['us']['translations']
    assert countries['us']['translations'] == [{'languageCode': 'fr', 'name': 'États-Unis'}]


def test_empty_translation_patch_sets_native_fields():
    patches = [{'code': 'us', 'translations': [], 'nativeLanguageCode': 'en', 'nativeName': 'USA'}]

    merged = apply_translation_patches(create_sample_countries(), patches)

    assert [t['languageCode'] for t in merged['us']['translations']] == ['fr', 'es']
    assert merged['us']['nativeLanguageCode'] == 'en'
    assert merged['us']['nativeName'] == 'USA'


def test_apply_translation_patches_idempotent():
    patches = [{'code': 'us', 'translations': [{'languageCode': 'fr', 'name': 'USA-fr'}]}]

    once = apply_translation_patches(create_sample_countries(), patches)
    twice = apply_translation_patches(once, patches)

    assert twice == once


def test_merge_countries_all_passes():
    countries = create_sample_countries()
    snapshot = copy.deepcopy(countries)

    merged = merge_countries(
        countries,
        timezones=create_sample_timezones(),
        languages=create_sample_languages(),
        mapping=[('us', 'en')],
        patches=[{'code': 'us', 'nativeName': 'USA'}],
    )

    assert len(merged['us']['timezones']) == 2
    assert merged['us']['languages'][0]['code'] == 'en'
    assert merged['us']['nativeName'] == 'USA'
    assert countries == snapshot


def test_merge_countries_without_sources():
    countries = create_sample_countries()
    assert merge_countries(countries) == countries


# Currencies

def test_aggregate_currencies():
    merged = create_sample_countries()
    currencies = aggregate_currencies(merged.values())

    assert list(currencies) == ['USD', 'CAD']

    usd = currencies['USD']
    assert usd['code'] == 'USD'
    # First country seen supplies name and symbol
    assert usd['name'] == 'United States dollar'
    assert usd['symbol'] == '$'
    assert usd['countries'] == [
        {'code': 'us', 'name': 'United States'},
        {'code': 'ec', 'name': 'Ecuador'},
    ]

    cad = currencies['CAD']
    assert cad['name'] == 'CAD'
    assert cad['symbol'] == ''


def test_aggregate_currencies_skips_missing():
    countries = [
        {'iso2': 'aq', 'name': 'Antarctica'},
        {'iso2': 'xx', 'name': 'Empty', 'currency': ''},
        {'iso2': 'yy', 'name': 'Odd', 'currency': None},
    ]
    assert aggregate_currencies(countries) == {}


if __name__ == '__main__':
    raise SystemExit(pytest.main([__file__, '-v']))

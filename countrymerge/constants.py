"""
Centralized constants for the country data pipeline.

File names and URLs used by the loaders and the exporter.
Import from here to ensure consistency.
"""

# Remote base dataset (countries with states and cities)
COUNTRIES_URL = (
    'https://raw.githubusercontent.com/dr5hn/countries-states-cities-database/'
    'master/json/countries%2Bstates%2Bcities.json'
)

# Default input file names, relative to the data directory
COUNTRIES_FILE = 'countries-states-cities.json'
TIMEZONES_FILE = 'timezones.json'
LANGUAGES_FILE = 'languages.json'
COUNTRY_LANGUAGES_FILE = 'country-language-mapping.json'
LANGUAGE_PATCH_FILE = 'paste-2.txt'
COUNTRY_PATCH_FILE = 'paste-3.txt'
TRANSLATIONS_FILE = 'countries.json'

# Output directory name, relative to the data directory
OUTPUT_DIR = 'output'

# Duplicate ISO2 tie-break policies
DUPLICATE_FIRST = 'first'
DUPLICATE_LAST = 'last'
DUPLICATE_POLICY = DUPLICATE_LAST

# Output views, in write order
OUTPUT_NAMES = [
    'merged-data',
    'timezones-by-country',
    'currencies-by-country',
    'all-timezones',
    'all-currencies',
    'countries-simple',
    'countries-with-translations',
    'countries-with-states',
    'countries-with-states-cities',
    'countries-complete',
    'countries-with-languages',
    'countries-without-languages',
]

JSON_INDENT = 2

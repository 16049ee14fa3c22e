"""
Data merging modules.

Folds timezones, languages and translation patches into the country
records and derives the currency index. Handles:
- De-duplication keyed by normalized code
- Override rules for translation patches
- Currency aggregation across countries
"""

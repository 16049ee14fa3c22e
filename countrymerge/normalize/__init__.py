"""
Record normalization modules.

- codes: case canonicalization of country, language and currency codes
- countries: converts raw country entries into canonical country records
"""

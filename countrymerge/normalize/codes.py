"""
Code normalization helpers.

Country and language codes are compared lowercase; currency codes use the
inverse convention and are compared uppercase.
"""

from typing import Any


def normalize_code(code: Any) -> str:
    """
    Canonicalize a country or language code for use as a mapping key.

    Non-string input (including None) normalizes to '', which never
    matches a real code.

    Examples:
        >>> normalize_code('US')
        'us'
        >>> normalize_code(None)
        ''
    """
    if isinstance(code, str):
        return code.lower()
    return ''


def normalize_currency_code(code: Any) -> str:
    """Canonicalize a currency code (uppercase)."""
    if isinstance(code, str):
        return code.upper()
    return ''

"""
Currency aggregation.

Builds a currency -> countries index from merged country records. Currency
codes are uppercased (countries and languages use lowercase).
"""

import logging
from typing import Dict, Iterable

from ..normalize.codes import normalize_currency_code

logger = logging.getLogger(__name__)


def aggregate_currencies(countries: Iterable[Dict]) -> Dict[str, Dict]:
    """
    Index countries by currency.

    The first country seen with a currency supplies its name and symbol.
    Countries are listed in iteration order.

    Args:
        countries: Merged country records (map values, in map order)

    Returns:
        Dict mapping uppercase currency code to
        {'code', 'name', 'symbol', 'countries': [{'code', 'name'}]}
    """
    currencies = {}

    for country in countries:
        code = normalize_currency_code(country.get('currency'))
        if not code:
            continue

        if code not in currencies:
            currencies[code] = {
                'code': code,
                'name': country.get('currency_name') or code,
                'symbol': country.get('currency_symbol') or '',
                'countries': [],
            }

        currencies[code]['countries'].append({
            'code': country.get('iso2'),
            'name': country.get('name'),
        })

    logger.info(f"Aggregated {len(currencies)} currencies")
    return currencies

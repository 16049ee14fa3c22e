"""
Country reference data pipeline.

Merges countries, timezones, languages, currencies and translations into
one record per country and writes derived JSON views.
"""

__version__ = '1.0.0'

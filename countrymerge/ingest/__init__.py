"""
Source loaders for the country data pipeline.

Each source has its own loader that:
1. Reads the raw file (or fetches it, for the base country list)
2. Repairs truncated patch fragments before parsing
3. Converts the data to one canonical in-memory shape
"""

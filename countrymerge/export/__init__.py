"""
Export modules.

Projects the merged country data into derived views and writes each one
as a JSON file.
"""

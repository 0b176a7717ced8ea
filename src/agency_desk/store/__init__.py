"""
Document store access.

Components:
- documents.py: SQLite-backed JSON document store + StoreTimestamp and write sentinels
- timestamps.py: schema-driven StoreTimestamp -> datetime normalization
"""

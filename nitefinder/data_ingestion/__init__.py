"""
Venue catalog ingestion package.

Responsibilities:
- Read the raw community survey table of bars.
- Normalize free-form survey answers into the canonical Venue schema.
- Persist the cleaned catalog locally for the venue store.
"""

"""
Venue catalog package.

Responsibilities:
- Define the closed vocabularies (genres, neighbourhoods, buckets) used by venues.
- Load the canonical venue catalog into memory.
- Search and filter venues for the browse pages.
"""

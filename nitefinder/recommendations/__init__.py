"""
Personalized venue recommendation engine.

Responsibilities:
- Score candidate venues against a user's profile and liked venues.
- Explain every score with human-readable reasoning.
- Rank, truncate and package recommendations for API serialisation.
- Build the categorized "for you" feed.
"""

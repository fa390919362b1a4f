"""
User activity package.

Responsibilities:
- Track the venues each user has favorited.
- Log visits with a self-reported experience rating and crowd-sourced reports.
- Expose the liked-venue signals consumed by the recommendation engine.
"""

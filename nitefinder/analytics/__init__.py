"""
Usage analytics package.

Responsibilities:
- Record recommendation requests and user activity as in-memory events.
- Summarise them for the admin dashboard.
"""

"""
User profile package.

Responsibilities:
- Hold each user's music and neighbourhood preferences.
- Apply partial preference updates from the preferences page.
"""

"""Authentication.

Users register or log in with email/password and receive an opaque
bearer token. Protected routes resolve that token back to a user through
the get_current_user dependency; a user holds at most one live token.
"""

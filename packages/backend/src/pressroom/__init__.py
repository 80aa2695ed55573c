"""Pressroom — articles API with token authentication.

A small REST service: users register or log in to receive an opaque
bearer token, and use it to read and write articles.
"""

__version__ = "0.1.0"

"""
REST API for the companies collection.

Exposes read-only filter, sort and count queries over the document store
for the analytics dashboard.
"""

__version__ = "1.0.0"

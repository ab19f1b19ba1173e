"""
Zips UI backend - Flask JSON API for browsing and editing zip code records.

Provides a paginated listing with city/state filters and multi-key sort,
plus create, update and delete of single zips.
"""

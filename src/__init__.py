"""Zips catalog backend packages."""

"""Bundled data files for clir."""

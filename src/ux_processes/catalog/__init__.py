"""Searchable SQLite catalog of the registered processes."""

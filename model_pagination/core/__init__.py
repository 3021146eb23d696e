"""Core pagination, database and settings packages."""

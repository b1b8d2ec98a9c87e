"""Template JSON files (package data)."""

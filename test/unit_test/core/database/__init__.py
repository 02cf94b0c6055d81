"""Unit tests for the database layer.

- Entity behaviour (derived properties)
- Repositories against an in-memory SQLite database
- Engine and URL utilities
"""

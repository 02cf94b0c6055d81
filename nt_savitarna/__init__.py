"""NT Savitarna.

Self-service portal backend for a real-estate valuation company.

High-level architecture
-----------------------

- ``core``: persistence (SQLModel entities and repositories), domain rules,
  the reporting layer, CSV/PDF export and geocoding helpers.
- ``server``: the FastAPI application, its routers, authentication
  dependencies and exception handlers.
"""

__version__ = "1.0.0"

"""API routers mounted under the ``/api`` prefix."""

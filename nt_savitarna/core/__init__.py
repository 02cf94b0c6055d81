"""Core building blocks shared by the API server: data access, domain rules and reports."""

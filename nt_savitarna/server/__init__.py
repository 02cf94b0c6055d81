"""FastAPI server for the valuation self-service portal."""

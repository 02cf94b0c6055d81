"""Domain enums, messages and business rules."""

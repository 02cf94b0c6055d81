"""
Models package.

- domain: enums, service catalogue and status rules
- io: request/response schemas exposed by the API
"""

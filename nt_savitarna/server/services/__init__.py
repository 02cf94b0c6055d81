"""
Server-side services: request dependencies and report assembly.
"""

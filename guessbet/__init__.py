"""Numeric-guessing betting sessions: registry, settlement and HTTP API."""

"""Derived analytics over fetched market data."""

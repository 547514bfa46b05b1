"""Reusable patterns the bookstore service is built from.

Each module is a self-contained pattern that can be adapted to any domain:
the async repository layer and dataclass domain configuration.
"""

"""Bookstore vertical — book inventory over swappable storage.

Brings the patterns together in one domain:
- Book record with to_dict() serialisation
- In-memory and MongoDB repositories behind one async interface
- FastAPI router for list, create, fetch and delete
- Dataclass configuration read from BOOKSTORE_* variables
"""

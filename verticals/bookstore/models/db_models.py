"""Storage-level record for the bookstore.

Both repositories hand Book instances back to the router. The to_dict()
method provides the standard serialisation interface used by repositories
and routers; from_document() maps a MongoDB document onto the record.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Book:
    """A book in the inventory.

    ``id`` is an int for the in-memory store and the ObjectId hex string
    for MongoDB.
    """

    id: int | str
    title: str
    author: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Book":
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            author=doc.get("author", ""),
        )

"""Fixed blog category table.

Category ids are not generated by the database: every post refers to one of
the seven ids below and the ``category`` row is created the first time a
post needs it.
"""
from enum import Enum


class Category(Enum):
    TECHNOLOGY = (1, "Technology")
    DESIGN = (2, "Design")
    STARTUP = (3, "Startup")
    LIFESTYLE = (4, "Lifestyle")
    TOOLS = (5, "Tools")
    MOBILE = (6, "Mobile")
    TIPS = (7, "Tips")

    def __init__(self, category_id: int, title: str) -> None:
        self.category_id = category_id
        self.title = title

    @classmethod
    def from_name(cls, name: str) -> "Category | None":
        """Case-insensitive lookup by name; None for unknown names."""
        return cls.__members__.get(name.strip().upper())


def validate_categories() -> None:
    """Check the table is consistent.  Called once at application startup."""
    ids = [c.category_id for c in Category]
    titles = [c.title.lower() for c in Category]
    if len(set(ids)) != len(ids):
        raise RuntimeError("Duplicate category id in Category table")
    if sorted(ids) != list(range(1, len(ids) + 1)):
        raise RuntimeError("Category ids must be contiguous from 1")
    if titles != [c.name.lower() for c in Category]:
        raise RuntimeError("Category titles must match their names")

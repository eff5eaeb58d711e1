"""ORM models - import all so Base.metadata is complete for migrations."""

from dropset.models.kv_entry import KeyValueEntry

__all__ = ["KeyValueEntry"]

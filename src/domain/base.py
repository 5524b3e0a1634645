"""Shared base for persisted records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Immutable record stored with camelCase keys.

    Records are never mutated in place; operations return ``model_copy(update=...)``
    snapshots so a session can be replaced wholesale by its owner.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_storage(self) -> dict:
        """Dump the record in its persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)

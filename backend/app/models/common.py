from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

# Largest value a SQLite INTEGER column holds.
MAX_STORED_INT = 2**63 - 1

# Reference fields must look like ids we hand out; existence is not checked.
EntityId = Annotated[str, Field(pattern=UUID_PATTERN)]


class MessageResponse(BaseModel):
    message: str


def reject_null_fields(model: BaseModel, nullable: frozenset[str] = frozenset()) -> None:
    """Refuse an explicit ``null`` for a field that has no empty value.

    Update requests treat a field as present when it appears in the body, so a
    ``null`` there would otherwise read as "keep the stored value".
    """
    for name in sorted(model.model_fields_set - nullable):
        if getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null.")

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KeyedRecord(BaseModel):
    """
    One key/value pair of a keyed store, derived on demand from the mapping.

    Accepts both `{"key": ..., "value": ...}` and the dataset shape
    `{"ID": ..., "data": ...}`; dumps by alias to the dataset shape.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key: str = Field(alias="ID")
    value: Any = Field(default=None, alias="data")

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

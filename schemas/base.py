from pydantic import BaseModel, ConfigDict
from typing import Any, Dict

class SchemaBase(BaseModel):
    """
    Base class for strategy schemas.

    Models are immutable once built. Input is accepted under the camelCase
    wire names only; Python attributes are snake_case.
    Unknown keys coming back from the model are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

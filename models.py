# models.py
from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

class ShowRecord(BaseModel):
    """One show from a catalog search, keyed the way the catalog's JSON is."""
    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    id: int = Field(0, alias="mal_id")
    url: str = ""
    image_url: str = ""
    title: str = ""
    is_airing: bool = Field(False, alias="airing")
    synopsis: str = ""
    type: str = ""
    episodes: int = 0
    score: float = 0.0
    start_date: str = ""
    end_date: str = ""
    members: int = 0
    rated: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value, info: ValidationInfo):
        # The catalog sends null for unknown episodes, scores and end dates.
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

@dataclass(frozen=True)
class SearchState:
    """A single object to hold the entire search state."""
    results: Tuple[ShowRecord, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


# --- Records ---
class ListEntry(BaseModel):
    """Minimal identity of a record as returned by list queries."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str


class FullRecord(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str
    author: str = Field(default="", validation_alias=AliasChoices("author", "writer"))
    kinds: List[str] = Field(default_factory=list, validation_alias=AliasChoices("kinds", "type"))
    body: str = Field(default="", validation_alias=AliasChoices("body", "content"))
    notes: Optional[str] = Field(default=None, validation_alias=AliasChoices("notes", "remark"))
    translation: Optional[str] = None
    commentary: Optional[str] = Field(default=None, validation_alias=AliasChoices("commentary", "shangxi"))
    audio_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("audio_url", "audioUrl"))

    @field_validator("kinds", mode="before")
    @classmethod
    def _coerce_kinds(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        return value

    @field_validator("author", "body", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("notes", "translation", "commentary", "audio_url", mode="after")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


# --- Wire envelope ---
class ListPayload(BaseModel):
    """The ``{total, pages, page, pagesize, data}`` envelope of list endpoints."""

    model_config = ConfigDict(extra="ignore")

    total: int = Field(ge=0)
    pages: int = Field(ge=0)
    page: int
    pagesize: int = Field(ge=0)
    data: List[ListEntry] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def validate_page_size(self) -> "ListPayload":
        if len(self.data) > self.pagesize:
            raise ValueError(
                f"page holds {len(self.data)} items but pagesize is {self.pagesize}"
            )
        return self

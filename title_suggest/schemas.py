from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SuggestionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    description: str | None = None
    keywords: list[str] | None = None
    niche: str | None = None
    language: str | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value):
        # The form sends a comma-separated string; API callers send a list.
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return value
        return [str(k).strip() for k in value if k is not None and str(k).strip()]


class TitlesMeta(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    count: int
    max_length: int = Field(serialization_alias="maxLength")
    model: str


class TitlesResponse(BaseModel):
    titles: list[str]
    meta: TitlesMeta


class ErrorResponse(BaseModel):
    error: str
    raw: Any = None

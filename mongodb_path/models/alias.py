from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Language code for aliases that apply regardless of language.
LANGUAGE_NONE = "und"

# The only keys an alias document may carry.
ALIAS_KEYS = frozenset({"_id", "alias", "first", "language", "pid", "source"})


def first_segment(source: str) -> str:
    """First non-empty path segment: "/node/1" and "node/1" both give "node"."""
    for part in source.split("/"):
        if part:
            return part
    return ""


def filter_keys(criteria: Mapping[str, Any]) -> dict:
    return {k: v for k, v in criteria.items() if k in ALIAS_KEYS}


class PathAlias(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[Any] = Field(default=None, alias="_id")
    pid: int
    source: str               # system path, e.g. "node/1"
    alias: str                # public path, e.g. "about-us"
    language: str = LANGUAGE_NONE
    first: Optional[str] = None  # cached first_segment(source), feeds the whitelist

    @model_validator(mode="after")
    def _derive_first(self) -> "PathAlias":
        if self.first is None:
            self.first = first_segment(self.source)
        return self

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def normalize_alias(path: Mapping[str, Any] | PathAlias) -> dict:
    """Return the document to persist for `path`; the input is left untouched."""
    if isinstance(path, PathAlias):
        return path.model_copy().to_document()
    return PathAlias.model_validate(dict(path)).to_document()

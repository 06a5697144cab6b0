from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

# --- Enums / Literals ---
TokenType = Literal[
    "color",
    "dimension",
    "fontSize",
    "fontWeight",
    "fontFamily",
    "lineHeight",
    "letterSpacing",
    "spacing",
    "shadow",
    "border",
    "duration",
    "cubicBezier",
    "number",
    "string",
    "typography",
    "boolean",
    "other",
]
TokenStatus = Literal["active", "deprecated", "draft", "archived"]
SourceFormat = Literal["w3c", "style-dictionary", "figma", "custom"]
SourceType = Literal["github", "gitlab", "local", "api", "figma"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Provenance ---

class TokenSource(BaseModel):
    type: SourceType
    location: str  # File path, URL, or identifier
    imported: datetime = Field(default_factory=_utcnow)
    branch: str | None = None
    commit: str | None = None

# --- Token ---

class Token(BaseModel):
    # Identity
    id: str = ""
    path: list[str] = Field(default_factory=list)
    name: str = ""
    qualified_name: str = ""

    # Value
    type: TokenType = "other"
    raw_value: Any = None
    value: Any = None
    resolved_value: Any = None

    # Relationships
    alias_to: str | None = None
    referenced_by: list[str] | None = None

    # Organization
    scope: str = ""  # "project" in the source domain
    collection: str = "default"
    theme: str | None = None
    brand: str | None = None

    # Metadata
    description: str | None = None
    source_format: SourceFormat = "custom"
    source: TokenSource | None = None
    extensions: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    status: TokenStatus = "active"
    version: str | None = None

    created: datetime = Field(default_factory=_utcnow)
    last_modified: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def derive_names(self) -> Token:
        # name / qualified_name follow path unless the producer set them
        if self.path:
            if not self.name:
                self.name = self.path[-1]
            if not self.qualified_name:
                self.qualified_name = ".".join(self.path)
        return self

    @property
    def is_alias(self) -> bool:
        return self.alias_to is not None

"""
Token schema validation.

Optional runtime check applied by the store on ``add`` when
``store.schema_validation`` is enabled in the rules. A failing token is not
rejected; the store demotes it to draft and records the issues returned here.

The schema is a discriminated union on ``type``: every token type pins the
payload shape of ``value`` and ``resolved_value``. Alias tokens may carry a
brace-wrapped reference string in place of the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from tokenkit.domain.entities import SourceFormat, Token, TokenStatus, TokenType
from tokenkit.domain.values import (
    ColorValue,
    CubicBezierValue,
    DimensionValue,
    ShadowValue,
    TypographyValue,
    ValueKind,
    value_kind,
)

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Reference = Annotated[str, StringConstraints(pattern=r"^\s*\{[^{}]+\}\s*$")]


# --- Validation Issue ---


@dataclass(frozen=True)
class TokenValidationIssue:
    """One schema violation, flattened for storage in token extensions."""

    path: str
    message: str
    code: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message, "code": self.code}


# --- Base Schema ---


class TokenBaseSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: NonEmptyStr
    path: list[NonEmptyStr] = Field(min_length=1)
    name: NonEmptyStr
    qualified_name: NonEmptyStr

    alias_to: str | None = None
    referenced_by: list[str] | None = None

    scope: NonEmptyStr
    collection: NonEmptyStr
    theme: str | None = None
    brand: str | None = None

    description: str | None = None
    source_format: SourceFormat
    extensions: dict[str, Any]
    tags: list[str]
    status: TokenStatus
    version: str | None = None

    raw_value: Any = None


# --- Per-Type Schemas ---


class ColorTokenSchema(TokenBaseSchema):
    type: Literal["color"]
    value: ColorValue | Reference


class DimensionTokenSchema(TokenBaseSchema):
    type: Literal["dimension"]
    value: DimensionValue | Reference


class SpacingTokenSchema(TokenBaseSchema):
    type: Literal["spacing"]
    value: DimensionValue | Reference


class FontSizeTokenSchema(TokenBaseSchema):
    type: Literal["fontSize"]
    value: DimensionValue | float | Reference


class FontWeightTokenSchema(TokenBaseSchema):
    type: Literal["fontWeight"]
    value: float | str


class FontFamilyTokenSchema(TokenBaseSchema):
    type: Literal["fontFamily"]
    value: str


class LineHeightTokenSchema(TokenBaseSchema):
    type: Literal["lineHeight"]
    value: DimensionValue | float | str


class LetterSpacingTokenSchema(TokenBaseSchema):
    type: Literal["letterSpacing"]
    value: DimensionValue | float | str


class ShadowTokenSchema(TokenBaseSchema):
    type: Literal["shadow"]
    value: ShadowValue | Reference


class BorderTokenSchema(TokenBaseSchema):
    type: Literal["border"]
    value: Any


class DurationTokenSchema(TokenBaseSchema):
    type: Literal["duration"]
    value: float | str


class CubicBezierTokenSchema(TokenBaseSchema):
    type: Literal["cubicBezier"]
    value: CubicBezierValue | Reference


class NumberTokenSchema(TokenBaseSchema):
    type: Literal["number"]
    value: float | Reference


class StringTokenSchema(TokenBaseSchema):
    type: Literal["string"]
    value: str


class TypographyTokenSchema(TokenBaseSchema):
    type: Literal["typography"]
    value: TypographyValue | Reference


class BooleanTokenSchema(TokenBaseSchema):
    type: Literal["boolean"]
    value: bool | Reference


class OtherTokenSchema(TokenBaseSchema):
    type: Literal["other"]
    value: Any


TokenSchema = Annotated[
    ColorTokenSchema
    | DimensionTokenSchema
    | SpacingTokenSchema
    | FontSizeTokenSchema
    | FontWeightTokenSchema
    | FontFamilyTokenSchema
    | LineHeightTokenSchema
    | LetterSpacingTokenSchema
    | ShadowTokenSchema
    | BorderTokenSchema
    | DurationTokenSchema
    | CubicBezierTokenSchema
    | NumberTokenSchema
    | StringTokenSchema
    | TypographyTokenSchema
    | BooleanTokenSchema
    | OtherTokenSchema,
    Field(discriminator="type"),
]

_TOKEN_ADAPTER: TypeAdapter[Any] = TypeAdapter(TokenSchema)

_VALUE_ADAPTERS: dict[ValueKind, TypeAdapter[Any]] = {
    "color": TypeAdapter(ColorValue),
    "dimension": TypeAdapter(DimensionValue),
    "font_size": TypeAdapter(DimensionValue | float),
    "font_weight": TypeAdapter(float | str),
    "font_family": TypeAdapter(str),
    "line_height": TypeAdapter(DimensionValue | float | str),
    "letter_spacing": TypeAdapter(DimensionValue | float | str),
    "shadow": TypeAdapter(ShadowValue),
    "border": TypeAdapter(Any),
    "duration": TypeAdapter(float | str),
    "cubic_bezier": TypeAdapter(CubicBezierValue),
    "number": TypeAdapter(float),
    "string": TypeAdapter(str),
    "typography": TypeAdapter(TypographyValue),
    "boolean": TypeAdapter(bool),
    "other": TypeAdapter(Any),
}


# --- Validation Functions ---


def _issues(error: ValidationError, prefix: tuple[str, ...] = ()) -> list[TokenValidationIssue]:
    return [
        TokenValidationIssue(
            path=".".join(str(part) for part in (*prefix, *item["loc"])),
            message=item["msg"],
            code=item["type"],
        )
        for item in error.errors()
    ]


def validate_token(token: Token) -> list[TokenValidationIssue]:
    """
    Validate a token against the schema for its type.

    A stamped ``resolved_value`` must match the payload shape of the type.

    Returns list of issues (empty = valid).
    """
    try:
        _TOKEN_ADAPTER.validate_python(token.model_dump())
    except ValidationError as e:
        return _issues(e)
    if token.resolved_value is None:
        return []
    return validate_token_value(token.resolved_value, token.type, prefix=("resolved_value",))


def validate_token_value(
    value: Any,
    token_type: TokenType,
    prefix: tuple[str, ...] = (),
) -> list[TokenValidationIssue]:
    """Validate a bare value against the payload shape of ``token_type``."""
    adapter = _VALUE_ADAPTERS[value_kind(token_type)]
    try:
        adapter.validate_python(value)
    except ValidationError as e:
        return _issues(e, prefix)
    return []


class SchemaTokenValidator:
    """Validator adapter handed to the store when schema validation is on."""

    def validate(self, token: Token) -> list[TokenValidationIssue]:
        return validate_token(token)

"""
Token value payloads.

Each token type carries one payload shape. ``value_kind`` maps every
``TokenType`` onto the closed set of payload kinds so consumers can match on
the kind instead of poking at ``Any`` values.

Alias values are reference strings wrapped in braces (``{color.base}``).
"""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from tokenkit.domain.entities import TokenType

ValueKind = Literal[
    "color",
    "dimension",
    "font_size",
    "font_weight",
    "font_family",
    "line_height",
    "letter_spacing",
    "shadow",
    "border",
    "duration",
    "cubic_bezier",
    "number",
    "string",
    "typography",
    "boolean",
    "other",
]

DimensionUnit = Literal["px", "rem", "em", "%", "pt"]
ColorSpace = Literal["sRGB", "display-p3", "hsl", "hsla", "rgb", "rgba"]

_HEX_PATTERN = r"^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$"
_REFERENCE_RE = re.compile(r"^\s*\{\s*([^{}\s][^{}]*?)\s*\}\s*$")


# --- Payload Models ---


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


HexColor = Annotated[str, StringConstraints(pattern=_HEX_PATTERN)]
Channel = Annotated[float, Field(ge=0, le=255)]
Alpha = Annotated[float, Field(ge=0, le=1)]
Hue = Annotated[float, Field(ge=0, le=360)]
Percent = Annotated[float, Field(ge=0, le=100)]


class ColorValue(_Payload):
    color_space: ColorSpace | None = Field(default=None, alias="colorSpace")
    hex: HexColor | None = None
    r: Channel | None = None
    g: Channel | None = None
    b: Channel | None = None
    a: Alpha | None = None
    h: Hue | None = None
    s: Percent | None = None
    l: Percent | None = None  # noqa: E741

    @model_validator(mode="after")
    def check_components(self) -> ColorValue:
        has_hex = self.hex is not None
        has_rgb = None not in (self.r, self.g, self.b)
        has_hsl = None not in (self.h, self.s, self.l)
        if not (has_hex or has_rgb or has_hsl):
            raise ValueError("ColorValue must have either hex, rgb, or hsl values")
        return self


class DimensionValue(_Payload):
    value: float
    unit: DimensionUnit


class ShadowValue(_Payload):
    offset_x: float | str = Field(alias="offsetX")
    offset_y: float | str = Field(alias="offsetY")
    blur: float | str
    spread: float | str | None = None
    color: str | ColorValue
    inset: bool | None = None


class TypographyValue(_Payload):
    font_family: str | None = Field(default=None, alias="fontFamily")
    font_size: float | str | DimensionValue | None = Field(default=None, alias="fontSize")
    font_weight: float | str | None = Field(default=None, alias="fontWeight")
    line_height: float | str | DimensionValue | None = Field(default=None, alias="lineHeight")
    letter_spacing: float | str | DimensionValue | None = Field(
        default=None, alias="letterSpacing"
    )


class CubicBezierValue(_Payload):
    x1: Alpha
    y1: float
    x2: Alpha
    y2: float


# --- Kind Mapping ---


def value_kind(token_type: TokenType) -> ValueKind:
    """Map a token type tag onto its payload kind."""
    match token_type:
        case "color":
            return "color"
        case "dimension" | "spacing":
            return "dimension"
        case "fontSize":
            return "font_size"
        case "fontWeight":
            return "font_weight"
        case "fontFamily":
            return "font_family"
        case "lineHeight":
            return "line_height"
        case "letterSpacing":
            return "letter_spacing"
        case "shadow":
            return "shadow"
        case "border":
            return "border"
        case "duration":
            return "duration"
        case "cubicBezier":
            return "cubic_bezier"
        case "number":
            return "number"
        case "string":
            return "string"
        case "typography":
            return "typography"
        case "boolean":
            return "boolean"
        case "other":
            return "other"
    raise ValueError(f"Unknown token type: {token_type!r}")


# --- References ---


def parse_reference(value: str) -> str | None:
    """Return the inner name of a reference string, or None."""
    match = _REFERENCE_RE.match(value)
    return match.group(1) if match else None

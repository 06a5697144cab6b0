"""
Tests for token value payloads and reference parsing.
"""

from __future__ import annotations

from typing import get_args

import pytest
from pydantic import ValidationError

from tokenkit.domain.entities import Token, TokenType
from tokenkit.domain.values import (
    ColorValue,
    CubicBezierValue,
    DimensionValue,
    ShadowValue,
    TypographyValue,
    parse_reference,
    value_kind,
)


class TestColorValue:
    def test_hex(self) -> None:
        assert ColorValue(hex="#1e40af").hex == "#1e40af"

    def test_hex_with_alpha(self) -> None:
        assert ColorValue(hex="#1e40af80").hex == "#1e40af80"

    def test_rgb_and_alias_field(self) -> None:
        color = ColorValue.model_validate({"r": 30, "g": 64, "b": 175, "colorSpace": "sRGB"})
        assert color.color_space == "sRGB"

    def test_hsl(self) -> None:
        assert ColorValue(h=220, s=70, l=40).h == 220

    def test_requires_components(self) -> None:
        with pytest.raises(ValidationError, match="hex, rgb, or hsl"):
            ColorValue(a=0.5)

    def test_partial_rgb_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ColorValue(r=10, g=10)

    @pytest.mark.parametrize(
        "fields",
        [
            {"hex": "1e40af"},
            {"hex": "#12345"},
            {"r": 256, "g": 0, "b": 0},
            {"hex": "#000000", "a": 2},
        ],
    )
    def test_out_of_range(self, fields: dict) -> None:
        with pytest.raises(ValidationError):
            ColorValue(**fields)


class TestOtherPayloads:
    def test_dimension_units(self) -> None:
        assert DimensionValue(value=1.5, unit="rem").unit == "rem"
        with pytest.raises(ValidationError):
            DimensionValue(value=1, unit="vw")

    def test_shadow_aliases(self) -> None:
        shadow = ShadowValue.model_validate(
            {"offsetX": 0, "offsetY": "2px", "blur": 4, "color": "#00000033"}
        )
        assert shadow.offset_y == "2px"
        assert shadow.inset is None

    def test_typography_all_optional(self) -> None:
        assert TypographyValue().font_family is None
        assert TypographyValue.model_validate({"fontWeight": 600}).font_weight == 600

    def test_cubic_bezier_bounds(self) -> None:
        assert CubicBezierValue(x1=0.4, y1=-0.5, x2=0.2, y2=1.6).y1 == -0.5
        with pytest.raises(ValidationError):
            CubicBezierValue(x1=1.2, y1=0, x2=0, y2=0)

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DimensionValue(value=1, unit="px", scale=2)


class TestValueKind:
    def test_every_type_has_a_kind(self) -> None:
        for token_type in get_args(TokenType):
            assert value_kind(token_type)

    def test_spacing_is_dimension(self) -> None:
        assert value_kind("spacing") == "dimension"
        assert value_kind("cubicBezier") == "cubic_bezier"

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            value_kind("gradient")  # type: ignore[arg-type]


class TestReferences:
    def test_parse_reference(self) -> None:
        assert parse_reference("{ color.base }") == "color.base"
        assert parse_reference("  { color/base } ") == "color/base"
        assert parse_reference("#fff") is None
        assert parse_reference("color.base") is None

    @pytest.mark.parametrize("value", ["{}", "{ }", "{{color.base}}"])
    def test_parse_reference_rejects_empty_and_nested(self, value: str) -> None:
        assert parse_reference(value) is None


class TestTokenEntity:
    def test_names_derived_from_path(self) -> None:
        token = Token(id="t", scope="p1", path=["color", "brand", "primary"])
        assert token.name == "primary"
        assert token.qualified_name == "color.brand.primary"

    def test_explicit_names_kept(self) -> None:
        token = Token(id="t", scope="p1", path=["a", "b"], name="B", qualified_name="a/b")
        assert token.name == "B"
        assert token.qualified_name == "a/b"

    def test_defaults(self) -> None:
        token = Token(id="t", scope="p1", path=["a"])
        assert token.collection == "default"
        assert token.status == "active"
        assert token.source_format == "custom"
        assert token.is_alias is False
        assert token.created.tzinfo is not None

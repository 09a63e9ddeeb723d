"""Tests for the Color value type and color math."""

from __future__ import annotations

import numpy as np
import pytest

from color_model import (
    BLACK,
    WHITE,
    Color,
    EmptySeedSetError,
    InvalidColorError,
    average,
    contrast,
    lab_to_lch,
    to_color,
)

SAMPLE_COLORS = [
    "#000000",
    "#ffffff",
    "#ff0000",
    "#00ff00",
    "#0000ff",
    "#808080",
    "#1f3b73",
    "#e4572e",
    "#f3a712",
    "#a8c686",
    "#669bbc",
    "#fafaf5",
]


class TestParse:
    """Normalizing hex strings and RGB triples."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#FF0000", "#ff0000"),
            ("ff0000", "#ff0000"),
            ("#f00", "#ff0000"),
            ("  #00Ff7a ", "#00ff7a"),
            ((255, 0, 0), "#ff0000"),
            ([0, 128, 255], "#0080ff"),
            (np.array([18, 52, 86]), "#123456"),
        ],
    )
    def test_normalizes_to_lowercase_hex(self, value: object, expected: str) -> None:
        assert to_color(value).hex == expected

    @pytest.mark.parametrize(
        "value",
        ["red", "#12345", "#gggggg", "+fffff", "", (1, 2), (256, 0, 0), (-1, 0, 0), None, 12],
    )
    def test_rejects_non_colors(self, value: object) -> None:
        with pytest.raises(InvalidColorError):
            to_color(value)

    def test_invalid_color_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Color("not a color")

    def test_equal_hex_means_equal_color(self) -> None:
        a = Color("#FFF")
        b = Color.parse((255, 255, 255))
        assert a == b
        assert len({a, b, WHITE}) == 1

    def test_parse_returns_existing_color(self) -> None:
        assert Color.parse(BLACK) is BLACK

    def test_str_is_hex(self) -> None:
        assert str(Color("#ABCDEF")) == "#abcdef"


class TestDerivedAttributes:
    """Hue, lightness and saturation computed from the hex."""

    @pytest.mark.parametrize(
        ("hex_val", "hue"),
        [("#ff0000", 0.0), ("#00ff00", 120.0), ("#0000ff", 240.0), ("#ffff00", 60.0)],
    )
    def test_hue(self, hex_val: str, hue: float) -> None:
        assert Color(hex_val).hue == pytest.approx(hue, abs=1e-6)

    def test_achromatic_hue_is_zero(self) -> None:
        assert Color("#808080").hue == 0.0
        assert Color("#808080").saturation == 0.0

    @pytest.mark.parametrize("hex_val", SAMPLE_COLORS)
    def test_hue_in_range(self, hex_val: str) -> None:
        assert 0.0 <= Color(hex_val).hue < 360.0

    def test_lightness_is_perceptual(self) -> None:
        assert WHITE.lightness == pytest.approx(100.0, abs=0.01)
        assert BLACK.lightness == pytest.approx(0.0, abs=1e-9)
        assert Color("#ff0000").lightness == pytest.approx(53.24, abs=0.1)
        # Yellow and blue share HSL lightness but not LAB lightness
        assert Color("#ffff00").lightness > 90
        assert Color("#0000ff").lightness < 35

    @pytest.mark.parametrize("hex_val", SAMPLE_COLORS)
    def test_lightness_in_range(self, hex_val: str) -> None:
        assert 0.0 <= Color(hex_val).lightness <= 100.0

    def test_saturation(self) -> None:
        assert Color("#ff0000").saturation == pytest.approx(1.0)


class TestAdjustHue:
    """Hue rotation with wraparound."""

    @pytest.mark.parametrize("hex_val", SAMPLE_COLORS)
    def test_full_rotation_is_identity(self, hex_val: str) -> None:
        color = Color(hex_val)
        assert color.adjust_hue("+360") == color
        assert color.adjust_hue(-360) == color

    def test_relative_strings_match_numbers(self) -> None:
        red = Color("#ff0000")
        assert red.adjust_hue("+180") == red.adjust_hue(180)
        assert red.adjust_hue("-60") == red.adjust_hue(300)

    def test_rotates_hue(self) -> None:
        rotated = Color("#ff0000").adjust_hue("+120")
        assert rotated.hue == pytest.approx(120.0, abs=0.5)

    def test_wraps_below_zero(self) -> None:
        rotated = Color("#ff0000").adjust_hue("-30")
        assert rotated.hue == pytest.approx(330.0, abs=0.5)

    def test_gray_is_unchanged(self) -> None:
        gray = Color("#808080")
        assert gray.adjust_hue("+180") == gray

    @pytest.mark.parametrize("delta", ["abc", "", "nan", None, float("nan"), True])
    def test_rejects_bad_delta(self, delta: object) -> None:
        with pytest.raises(ValueError):
            Color("#ff0000").adjust_hue(delta)


class TestLightnessAdjustments:
    """Brighten, darken and desaturate."""

    def test_brighten_steps_lab_lightness(self) -> None:
        gray = Color("#808080")
        assert gray.brighten(1).lightness == pytest.approx(gray.lightness + 18, abs=0.5)

    def test_darken_steps_lab_lightness(self) -> None:
        gray = Color("#808080")
        assert gray.darken(2).lightness == pytest.approx(gray.lightness - 36, abs=0.5)

    @pytest.mark.parametrize("hex_val", ["#1f3b73", "#e4572e", "#669bbc", "#808080"])
    def test_monotonic(self, hex_val: str) -> None:
        color = Color(hex_val)
        assert color.darken(1).lightness < color.lightness < color.brighten(1).lightness
        assert color.darken(2).lightness < color.darken(1).lightness

    def test_clips_at_extremes(self) -> None:
        assert WHITE.brighten(1) == WHITE
        assert BLACK.darken(1) == BLACK

    def test_desaturate_reduces_chroma(self) -> None:
        color = Color("#e4572e")
        _, before, _ = lab_to_lch(color.lab)
        _, after, _ = lab_to_lch(color.desaturate(1).lab)
        assert after < before

    def test_desaturate_floors_at_gray(self) -> None:
        muted = Color("#e4572e").desaturate(10)
        _, chroma, _ = lab_to_lch(muted.lab)
        assert chroma < 2.0

    def test_returns_new_color(self) -> None:
        color = Color("#669bbc")
        color.brighten(1)
        assert color.hex == "#669bbc"


class TestContrast:
    """WCAG contrast ratio."""

    def test_black_on_white_is_maximum(self) -> None:
        assert round(contrast("#FFFFFF", "#000000"), 2) == 21.00

    def test_same_color_is_one(self) -> None:
        assert contrast("#669bbc", "#669bbc") == pytest.approx(1.0)

    def test_mid_gray(self) -> None:
        assert round(contrast("#808080", WHITE), 2) == 3.95
        assert round(contrast("#808080", BLACK), 2) == 5.32

    @pytest.mark.parametrize("a", SAMPLE_COLORS)
    @pytest.mark.parametrize("b", SAMPLE_COLORS)
    def test_symmetric_and_bounded(self, a: str, b: str) -> None:
        ratio = contrast(a, b)
        assert ratio == contrast(b, a)
        assert 1.0 <= ratio <= 21.0 + 1e-9

    def test_accepts_rgb_triples(self) -> None:
        assert contrast((255, 255, 255), "#000") == contrast(WHITE, BLACK)

    def test_invalid_input(self) -> None:
        with pytest.raises(InvalidColorError):
            contrast("#ffffff", "nope")


class TestAverage:
    """Averaging in LAB and RGB."""

    def test_single_color_is_itself(self) -> None:
        assert average(["#3366cc"]) == Color("#3366cc")

    def test_lab_midpoint_of_black_and_white(self) -> None:
        r, g, b = average(["#000000", "#ffffff"], "lab").rgb
        assert max(r, g, b) - min(r, g, b) <= 1
        # L* = 50 is darker than the RGB midpoint
        assert 110 <= r <= 125

    def test_rgb_midpoint(self) -> None:
        assert average(["#000000", "#ffffff"], "rgb") == Color("#808080")

    def test_lab_and_rgb_differ_for_complements(self) -> None:
        colors = ["#ff0000", "#00ffff"]
        assert average(colors, "lab") != average(colors, "rgb")

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptySeedSetError):
            average([])

    def test_unknown_space(self) -> None:
        with pytest.raises(ValueError, match="Unsupported averaging space"):
            average(["#ffffff"], "hsv")

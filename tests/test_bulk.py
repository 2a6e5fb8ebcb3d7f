# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Tests for whole-buffer conversion in place."""

from dataclasses import dataclass

import numpy as np
import pytest

from huecast.cast import ColorArray
from huecast.convert import (
    Color,
    from_color_unclamped,
    from_color_unclamped_array,
    from_color_unclamped_list,
    unclamped_conversion,
)
from huecast.derive import derive_array_cast, fixed_layout
from huecast.errors import (
    LayoutMismatchError,
    MissingArrayCastError,
    ReleasedBufferError,
    UndefinedConversionError,
)
from huecast.spaces import LinSrgb, Oklab, Oklch, Srgb

CALLS = []


@derive_array_cast
@fixed_layout("C")
@dataclass(frozen=True)
class Xyz(Color):
    x: np.float32
    y: np.float32
    z: np.float32


@derive_array_cast
@fixed_layout("C")
@dataclass(frozen=True)
class Yxy(Color):
    luma: np.float32
    x: np.float32
    y: np.float32


@derive_array_cast
@fixed_layout("C")
@dataclass(frozen=True)
class Rgba(Color):
    red: np.float32
    green: np.float32
    blue: np.float32
    alpha: np.float32


@dataclass(frozen=True)
class Untyped(Color):
    x: float
    y: float
    z: float


@unclamped_conversion(Xyz, Yxy)
def _xyz_to_yxy(color: Xyz) -> Yxy:
    CALLS.append(color)
    total = color.x + color.y + color.z
    return Yxy(color.y, color.x / total, color.y / total)


@unclamped_conversion(Xyz, Rgba)
def _xyz_to_rgba(color: Xyz) -> Rgba:
    return Rgba(color.x, color.y, color.z, 1.0)


@unclamped_conversion(Xyz, Srgb)
def _xyz_to_srgb(color: Xyz) -> Srgb:
    return Srgb(color.x, color.y, color.z)


@unclamped_conversion(Xyz, Untyped)
def _xyz_to_untyped(color: Xyz) -> Untyped:
    return Untyped(color.x, color.y, color.z)


@pytest.fixture(autouse=True)
def _reset_calls():
    CALLS.clear()


def _srgb_colors():
    return [Srgb(0.8, 1.0, 0.2), Srgb(0.9, 0.1, 0.3), Srgb(0.0, 0.0, 0.0)]


class TestListConversion:

    def test_same_list_returned(self):
        colors = _srgb_colors()
        result = from_color_unclamped_list(colors, Oklch)
        assert result is colors

    def test_length_and_order_preserved(self):
        expected = [Oklch.from_color_unclamped(c) for c in _srgb_colors()]
        result = from_color_unclamped_list(_srgb_colors(), Oklch)
        assert len(result) == 3
        assert all(isinstance(c, Oklch) for c in result)
        assert result == expected

    def test_roundtrip(self):
        lch = from_color_unclamped_list(_srgb_colors(), Oklch)
        rgb = from_color_unclamped_list(lch, Srgb)
        for got, want in zip(rgb, _srgb_colors()):
            np.testing.assert_allclose(
                [got.red, got.green, got.blue], [want.red, want.green, want.blue], atol=1e-9,
            )

    def test_empty_without_source(self):
        colors = []
        assert from_color_unclamped_list(colors, Oklab) is colors

    def test_empty_with_source(self):
        assert from_color_unclamped_list([], Yxy, source=Xyz) == []
        assert CALLS == []

    def test_empty_checks_layouts(self):
        with pytest.raises(LayoutMismatchError):
            from_color_unclamped_list([], Rgba, source=Xyz)

    def test_layout_mismatch_leaves_list_untouched(self):
        colors = [Xyz(0.1, 0.2, 0.3)]
        with pytest.raises(LayoutMismatchError, match=r"\[float32; 3\].*\[float32; 4\]"):
            from_color_unclamped_list(colors, Rgba)
        assert colors == [Xyz(0.1, 0.2, 0.3)]

    def test_channel_type_mismatch(self):
        with pytest.raises(LayoutMismatchError):
            from_color_unclamped_list([Xyz(0.1, 0.2, 0.3)], Srgb)

    def test_target_without_descriptor(self):
        with pytest.raises(MissingArrayCastError):
            from_color_unclamped_list([Xyz(0.1, 0.2, 0.3)], Untyped)

    def test_different_field_names_same_shape(self):
        result = from_color_unclamped_list([LinSrgb(0.2, 0.4, 0.6)], Oklab)
        assert result == [Oklab.from_color_unclamped(LinSrgb(0.2, 0.4, 0.6))]

    def test_mixed_list_without_edge_left_untouched(self):
        colors = [Xyz(1.0, 2.0, 1.0), Yxy(2.0, 0.25, 0.5)]
        first = colors[0]
        with pytest.raises(UndefinedConversionError):
            from_color_unclamped_list(colors, Xyz)
        assert colors[0] is first
        assert colors[1] == Yxy(2.0, 0.25, 0.5)

    def test_mixed_list_layout_checked_before_writing(self):
        colors = [Xyz(1.0, 2.0, 1.0), Srgb(0.1, 0.2, 0.3)]
        with pytest.raises(LayoutMismatchError):
            from_color_unclamped_list(colors, Yxy)
        assert CALLS == []
        assert colors == [Xyz(1.0, 2.0, 1.0), Srgb(0.1, 0.2, 0.3)]


class TestArrayConversion:

    def test_storage_reused(self):
        colors = ColorArray.from_colors(Srgb, _srgb_colors())
        storage = colors.components
        result = from_color_unclamped_array(colors, Oklch)
        assert result.color_type is Oklch
        assert result.components is storage

    def test_input_released(self):
        colors = ColorArray.from_colors(Srgb, _srgb_colors())
        from_color_unclamped_array(colors, Oklch)
        assert colors.released
        with pytest.raises(ReleasedBufferError):
            colors[0]

    def test_values_match_single_conversion(self):
        expected = [Oklch.from_color_unclamped(c) for c in _srgb_colors()]
        result = from_color_unclamped_array(ColorArray.from_colors(Srgb, _srgb_colors()), Oklch)
        assert len(result) == 3
        for got, want in zip(result, expected):
            np.testing.assert_allclose(
                [got.l, got.chroma, got.hue], [want.l, want.chroma, want.hue], atol=1e-12,
            )

    def test_each_element_converted_once_in_order(self):
        values = [Xyz(1.0, 2.0, 1.0), Xyz(0.5, 0.5, 1.0)]
        result = from_color_unclamped_array(ColorArray.from_colors(Xyz, values), Yxy)
        assert CALLS == values
        assert result[0] == Yxy(2.0, 0.25, 0.5)
        assert result[1] == Yxy(0.5, 0.25, 0.25)

    def test_empty(self):
        result = from_color_unclamped_array(ColorArray.from_colors(Xyz, []), Yxy)
        assert len(result) == 0
        assert result.color_type is Yxy
        assert CALLS == []

    def test_mismatch_keeps_input(self):
        colors = ColorArray.from_colors(Xyz, [Xyz(0.5, 0.5, 0.5)])
        with pytest.raises(LayoutMismatchError):
            from_color_unclamped_array(colors, Rgba)
        assert not colors.released
        assert colors[0] == Xyz(0.5, 0.5, 0.5)

    def test_missing_edge_keeps_input(self):
        colors = ColorArray.from_colors(Yxy, [Yxy(2.0, 0.25, 0.5)])
        with pytest.raises(UndefinedConversionError):
            from_color_unclamped_array(colors, Xyz)
        assert not colors.released
        assert colors[0] == Yxy(2.0, 0.25, 0.5)

    def test_slice_refused_and_parent_intact(self):
        colors = ColorArray.from_colors(Xyz, [Xyz(1.0, 2.0, 1.0), Xyz(0.5, 0.5, 1.0)])
        with pytest.raises(ValueError, match="view"):
            from_color_unclamped_array(colors[0:1], Yxy)
        assert CALLS == []
        assert not colors.released
        assert colors.to_list() == [Xyz(1.0, 2.0, 1.0), Xyz(0.5, 0.5, 1.0)]

    def test_copied_slice_converts_without_touching_parent(self):
        colors = ColorArray.from_colors(Xyz, [Xyz(1.0, 2.0, 1.0), Xyz(0.5, 0.5, 1.0)])
        result = from_color_unclamped_array(colors[0:1].copy(), Yxy)
        assert result.to_list() == [Yxy(2.0, 0.25, 0.5)]
        assert colors[0] == Xyz(1.0, 2.0, 1.0)

    def test_out_of_gamut_values_kept(self):
        colors = ColorArray.from_colors(Oklch, [Oklch(0.5, 0.4, 185.0)])
        rgb = from_color_unclamped_array(colors, Srgb)
        assert not rgb[0].is_within_bounds()
        single = from_color_unclamped(Srgb, Oklch(0.5, 0.4, 185.0))
        assert rgb[0] == single
        assert rgb[0].red < 0.0

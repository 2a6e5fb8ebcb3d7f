# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Tests for ColorArray and zero-copy reinterpretation."""

import ctypes
from dataclasses import dataclass

import numpy as np
import pytest

from huecast.cast import (
    ColorArray,
    as_records,
    from_arrays,
    from_components,
    into_arrays,
    into_components,
)
from huecast.derive import derive_array_cast, fixed_layout
from huecast.errors import LayoutMismatchError, MissingArrayCastError, ReleasedBufferError


@derive_array_cast
@fixed_layout("C")
@dataclass(frozen=True)
class Rgb:
    red: np.float32
    green: np.float32
    blue: np.float32


class CRgb(ctypes.Structure):
    _fields_ = [("r", ctypes.c_float), ("g", ctypes.c_float), ("b", ctypes.c_float)]


derive_array_cast(CRgb)


def _two_colors():
    return ColorArray.from_colors(Rgb, [Rgb(0.5, 0.25, 1.0), Rgb(0.0, 0.75, 0.125)])


class TestColorArray:

    def test_from_colors(self):
        colors = _two_colors()
        assert len(colors) == 2
        assert colors.components.shape == (2, 3)
        assert colors.components.dtype == np.float32
        assert colors[1] == Rgb(0.0, 0.75, 0.125)

    def test_from_no_colors(self):
        colors = ColorArray.from_colors(Rgb, [])
        assert len(colors) == 0
        assert colors.components.shape == (0, 3)
        assert colors.to_list() == []

    def test_iteration_order(self):
        assert _two_colors().to_list() == [Rgb(0.5, 0.25, 1.0), Rgb(0.0, 0.75, 0.125)]

    def test_negative_index(self):
        assert _two_colors()[-1] == Rgb(0.0, 0.75, 0.125)

    def test_slice_is_a_view(self):
        colors = _two_colors()
        tail = colors[1:]
        assert len(tail) == 1
        assert np.shares_memory(tail.components, colors.components)
        assert not tail.owns_storage

    def test_slice_cannot_be_released(self):
        colors = _two_colors()
        tail = colors[1:]
        with pytest.raises(ValueError, match="view"):
            tail.release()
        assert not tail.released
        assert colors[1] == Rgb(0.0, 0.75, 0.125)

    def test_copy_owns_its_storage(self):
        colors = _two_colors()
        tail = colors[1:].copy()
        assert tail.owns_storage
        assert not np.shares_memory(tail.components, colors.components)
        assert tail.to_list() == [Rgb(0.0, 0.75, 0.125)]

    def test_setitem_writes_storage(self):
        colors = _two_colors()
        colors[0] = Rgb(1.0, 1.0, 1.0)
        np.testing.assert_array_equal(colors.components[0], [1.0, 1.0, 1.0])

    def test_setitem_wrong_type(self):
        with pytest.raises(TypeError):
            _two_colors()[0] = (1.0, 1.0, 1.0)

    def test_wrong_dtype(self):
        with pytest.raises(LayoutMismatchError, match="dtype"):
            ColorArray(Rgb, np.zeros((2, 3), dtype=np.float64))

    def test_wrong_width(self):
        with pytest.raises(LayoutMismatchError, match="shape"):
            ColorArray(Rgb, np.zeros((2, 4), dtype=np.float32))

    def test_not_an_array(self):
        with pytest.raises(TypeError):
            ColorArray(Rgb, [[0.0, 0.0, 0.0]])

    def test_requires_descriptor(self):
        class Plain:
            pass

        with pytest.raises(MissingArrayCastError):
            ColorArray(Plain, np.zeros((1, 3), dtype=np.float32))

    def test_release(self):
        colors = _two_colors()
        storage = colors.release()
        assert storage.shape == (2, 3)
        assert colors.released
        with pytest.raises(ReleasedBufferError):
            len(colors)
        with pytest.raises(ReleasedBufferError):
            colors[0]
        assert "released" in repr(colors)

    def test_repr(self):
        assert "[float32; 3]" in repr(_two_colors())


class TestReinterpretation:

    def test_from_components_is_zero_copy(self):
        flat = np.arange(6, dtype=np.float32)
        colors = from_components(Rgb, flat)
        assert np.shares_memory(colors.components, flat)
        assert colors[1] == Rgb(3.0, 4.0, 5.0)

    def test_writes_show_through(self):
        flat = np.zeros(3, dtype=np.float32)
        colors = from_components(Rgb, flat)
        colors[0] = Rgb(0.5, 0.25, 0.125)
        np.testing.assert_array_equal(flat, [0.5, 0.25, 0.125])

    def test_from_components_bad_length(self):
        with pytest.raises(LayoutMismatchError, match="divide"):
            from_components(Rgb, np.zeros(4, dtype=np.float32))

    def test_from_components_bad_dtype(self):
        with pytest.raises(LayoutMismatchError):
            from_components(Rgb, np.zeros(3, dtype=np.float64))

    def test_from_components_not_contiguous(self):
        with pytest.raises(ValueError, match="contiguous"):
            from_components(Rgb, np.zeros(12, dtype=np.float32)[::2])

    def test_from_components_2d_rejected(self):
        with pytest.raises(LayoutMismatchError):
            from_components(Rgb, np.zeros((2, 3), dtype=np.float32))

    def test_from_components_not_an_array(self):
        with pytest.raises(TypeError, match="numpy array"):
            from_components(Rgb, [0.5, 0.25, 1.0])

    def test_into_components_order(self):
        """Field i of color j is component j*N + i."""
        colors = ColorArray.from_colors(Rgb, [Rgb(1.0, 2.0, 3.0), Rgb(4.0, 5.0, 6.0)])
        flat = into_components(colors)
        np.testing.assert_array_equal(flat, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert colors.released

    def test_into_components_shares_storage(self):
        storage = np.zeros((2, 3), dtype=np.float32)
        flat = into_components(from_arrays(Rgb, storage))
        assert np.shares_memory(flat, storage)

    def test_into_arrays(self):
        storage = np.ones((4, 3), dtype=np.float32)
        assert into_arrays(from_arrays(Rgb, storage)) is storage

    def test_records(self):
        colors = ColorArray.from_colors(Rgb, [Rgb(1.0, 2.0, 3.0), Rgb(4.0, 5.0, 6.0)])
        records = as_records(colors)
        assert records.shape == (2,)
        np.testing.assert_array_equal(records["green"], [2.0, 5.0])
        assert np.shares_memory(records, colors.components)


class TestLayoutSoundness:
    """A run of k colors is byte-identical to k*N channel values."""

    def test_ctypes_bytes_match_components(self):
        values = [(1.0, 2.0, 3.0), (4.0, 5.0, 6.0), (7.0, 8.0, 9.0)]
        structs = (CRgb * 3)(*(CRgb(*v) for v in values))
        flat = np.array(values, dtype=np.float32).reshape(-1)
        assert bytes(structs) == flat.tobytes()

    def test_ctypes_buffer_reinterpreted(self):
        structs = (CRgb * 2)(CRgb(1.0, 2.0, 3.0), CRgb(4.0, 5.0, 6.0))
        colors = from_components(CRgb, np.frombuffer(bytes(structs), dtype=np.float32))
        second = colors[1]
        assert (second.r, second.g, second.b) == (4.0, 5.0, 6.0)

    def test_records_bytes_match_components(self):
        colors = ColorArray.from_colors(Rgb, [Rgb(0.5, 0.25, 1.0), Rgb(0.0, 0.75, 0.125)])
        assert as_records(colors).tobytes() == colors.components.tobytes()

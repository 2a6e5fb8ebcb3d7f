# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Huecast -- typed color conversion and zero-copy color buffers.

Declare how a color type is built from another, and get the reverse
spelling and whole-buffer conversion for free. Derive a layout descriptor
to prove a color type is laid out like ``[C; N]`` and reinterpret buffers
of it as flat numpy arrays without copying.

Quick start::

    from huecast import ColorArray, from_color_unclamped_array
    from huecast.spaces import Oklch, Srgb

    lch = Oklch.from_color_unclamped(Srgb(0.8, 0.2, 0.1))
    rgb = lch.into_color_unclamped(Srgb)

    buf = ColorArray.from_colors(Srgb, [Srgb(0.8, 1.0, 0.2), Srgb(0.9, 0.1, 0.3)])
    buf = from_color_unclamped_array(buf, Oklch)   # same storage, now OKLCH
"""

from __future__ import annotations

__version__ = "1.0.0"

from huecast.cast import (
    ArrayCast,
    ArrayShape,
    ColorArray,
    array_cast_of,
    from_components,
    into_components,
)
from huecast.convert import (
    Color,
    from_color_unclamped,
    from_color_unclamped_array,
    from_color_unclamped_list,
    into_color_unclamped,
    unclamped_conversion,
)
from huecast.derive import derive_array_cast, fixed_layout, same_layout_as, zero_sized
from huecast.errors import (
    ArrayCastDeriveError,
    HuecastError,
    LayoutMismatchError,
    MissingArrayCastError,
    ReleasedBufferError,
    UndefinedConversionError,
)

__all__ = [
    # Conversion
    "Color",
    "unclamped_conversion",
    "from_color_unclamped",
    "into_color_unclamped",
    "from_color_unclamped_list",
    "from_color_unclamped_array",
    # Layout
    "derive_array_cast",
    "fixed_layout",
    "zero_sized",
    "same_layout_as",
    "ArrayCast",
    "ArrayShape",
    "array_cast_of",
    # Buffers
    "ColorArray",
    "from_components",
    "into_components",
    # Errors
    "HuecastError",
    "ArrayCastDeriveError",
    "MissingArrayCastError",
    "LayoutMismatchError",
    "UndefinedConversionError",
    "ReleasedBufferError",
    # Version
    "__version__",
]

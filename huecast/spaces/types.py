# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Built-in color types and the conversions between them.

    Srgb ↔ LinSrgb ↔ Oklab ↔ Oklch

plus the direct Srgb ↔ Oklab/Oklch and LinSrgb ↔ Oklch shortcuts. All
channels are float64 and every type carries an ``ArrayCast`` descriptor of
``[float64; 3]``, so buffers of any of them can be converted into each
other in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

import numpy as np

from huecast.convert.unclamped import Color, unclamped_conversion
from huecast.derive.decorator import DeriveConfig, derive_array_cast
from huecast.derive.schema import fixed_layout, same_layout_as, zero_sized
from huecast.spaces import colorspace

_BUILTIN = DeriveConfig(internal=True)

# Hue angle in degrees. Stored as a plain float64.
OklabHue = NewType("OklabHue", float)


@derive_array_cast(config=_BUILTIN)
@fixed_layout("C")
@dataclass(frozen=True, slots=True)
class Srgb(Color):
    """
    Gamma-encoded sRGB.

    Attributes:
        red, green, blue: Nominally 0-1; unclamped conversions may leave
            this range
        standard: RGB standard tag, not stored in buffers
    """
    red: np.float64
    green: np.float64
    blue: np.float64
    standard: str = zero_sized("srgb", repr=False)

    def is_within_bounds(self) -> bool:
        return all(0.0 <= c <= 1.0 for c in (self.red, self.green, self.blue))

    def to_hex(self) -> str:
        """Hex string like "#3941C8". Channels are clipped to 0-1 first."""
        r, g, b = (np.clip([self.red, self.green, self.blue], 0.0, 1.0) * 255).round().astype(int)
        return f"#{r:02X}{g:02X}{b:02X}"

    @classmethod
    def from_hex(cls, hex_color: str) -> Srgb:
        """Parse "#3941C8" or "3941C8"."""
        hex_color = hex_color.lstrip("#")
        if len(hex_color) != 6:
            raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")
        r, g, b = (int(hex_color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(r, g, b)


@derive_array_cast(config=_BUILTIN)
@fixed_layout("C")
@dataclass(frozen=True, slots=True)
class LinSrgb(Color):
    """Linear-light sRGB."""
    red: np.float64
    green: np.float64
    blue: np.float64
    standard: str = zero_sized("linear srgb", repr=False)

    def is_within_bounds(self) -> bool:
        return all(0.0 <= c <= 1.0 for c in (self.red, self.green, self.blue))


@derive_array_cast(config=_BUILTIN)
@fixed_layout("C")
@dataclass(frozen=True, slots=True)
class Oklab(Color):
    """
    OKLab.

    Attributes:
        l: Lightness (0.0 = black, 1.0 = white)
        a: Green (-) to red (+)
        b: Blue (-) to yellow (+)
    """
    l: np.float64
    a: np.float64
    b: np.float64


@derive_array_cast(config=_BUILTIN)
@fixed_layout("C")
@dataclass(frozen=True, slots=True)
class Oklch(Color):
    """
    OKLCH, the cylindrical form of OKLab.

    Attributes:
        l: Lightness (0.0 = black, 1.0 = white)
        chroma: 0.0 = neutral gray, ~0.32 = most saturated in sRGB
        hue: Degrees, 0-360
    """
    l: np.float64
    chroma: np.float64
    hue: OklabHue = same_layout_as(np.float64)

    @property
    def is_achromatic(self) -> bool:
        return self.chroma < 0.02


# =============================================================================
# Conversions
# =============================================================================


def _rgb(color) -> np.ndarray:
    return np.array([color.red, color.green, color.blue], dtype=np.float64)


@unclamped_conversion(Srgb, LinSrgb)
def _srgb_to_linsrgb(color: Srgb) -> LinSrgb:
    return LinSrgb(*colorspace.srgb_to_linear(_rgb(color)).tolist())


@unclamped_conversion(LinSrgb, Srgb)
def _linsrgb_to_srgb(color: LinSrgb) -> Srgb:
    return Srgb(*colorspace.linear_to_srgb(_rgb(color)).tolist())


@unclamped_conversion(LinSrgb, Oklab)
def _linsrgb_to_oklab(color: LinSrgb) -> Oklab:
    return Oklab(*colorspace.linear_srgb_to_oklab(_rgb(color)).tolist())


@unclamped_conversion(Oklab, LinSrgb)
def _oklab_to_linsrgb(color: Oklab) -> LinSrgb:
    lab = np.array([color.l, color.a, color.b], dtype=np.float64)
    return LinSrgb(*colorspace.oklab_to_linear_srgb(lab).tolist())


@unclamped_conversion(Oklab, Oklch)
def _oklab_to_oklch(color: Oklab) -> Oklch:
    lab = np.array([color.l, color.a, color.b], dtype=np.float64)
    l, chroma, hue = colorspace.oklab_to_oklch(lab).tolist()
    return Oklch(l, chroma, OklabHue(hue))


@unclamped_conversion(Oklch, Oklab)
def _oklch_to_oklab(color: Oklch) -> Oklab:
    lch = np.array([color.l, color.chroma, color.hue], dtype=np.float64)
    return Oklab(*colorspace.oklch_to_oklab(lch).tolist())


@unclamped_conversion(Srgb, Oklab)
def _srgb_to_oklab(color: Srgb) -> Oklab:
    return _linsrgb_to_oklab(_srgb_to_linsrgb(color))


@unclamped_conversion(Oklab, Srgb)
def _oklab_to_srgb(color: Oklab) -> Srgb:
    return _linsrgb_to_srgb(_oklab_to_linsrgb(color))


@unclamped_conversion(LinSrgb, Oklch)
def _linsrgb_to_oklch(color: LinSrgb) -> Oklch:
    return _oklab_to_oklch(_linsrgb_to_oklab(color))


@unclamped_conversion(Oklch, LinSrgb)
def _oklch_to_linsrgb(color: Oklch) -> LinSrgb:
    return _oklab_to_linsrgb(_oklch_to_oklab(color))


@unclamped_conversion(Srgb, Oklch)
def _srgb_to_oklch(color: Srgb) -> Oklch:
    return _oklab_to_oklch(_srgb_to_oklab(color))


@unclamped_conversion(Oklch, Srgb)
def _oklch_to_srgb(color: Oklch) -> Srgb:
    return _oklab_to_srgb(_oklch_to_oklab(color))

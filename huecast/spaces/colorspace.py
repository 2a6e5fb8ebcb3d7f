# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Color space math for the built-in color types.

Conversion chain: sRGB ↔ Linear sRGB ↔ OKLab ↔ OKLCH

References:
- OKLab: https://bottosson.github.io/posts/oklab/
- OKLCH: Cylindrical form of OKLab (Lightness, Chroma, Hue)

All functions take and return arrays of shape (..., 3) and are unclamped:
out-of-gamut input produces out-of-gamut output instead of being clipped.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


# =============================================================================
# sRGB ↔ Linear sRGB
# =============================================================================


def srgb_to_linear(srgb: ArrayLike) -> NDArray[np.float64]:
    """
    Decode sRGB to linear light.

    Piecewise transfer function, mirrored around zero for negative input:
    - |value| <= 0.04045: value / 12.92
    - otherwise: ((|value| + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    magnitude = np.abs(srgb)
    linear = np.where(
        magnitude <= 0.04045,
        magnitude / 12.92,
        np.power((magnitude + 0.055) / 1.055, 2.4),
    )
    return np.copysign(linear, srgb)


def linear_to_srgb(linear: ArrayLike) -> NDArray[np.float64]:
    """Encode linear light as sRGB. Inverse of srgb_to_linear."""
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    srgb = np.where(
        magnitude <= 0.0031308,
        magnitude * 12.92,
        1.055 * np.power(magnitude, 1.0 / 2.4) - 0.055,
    )
    return np.copysign(srgb, linear)


# =============================================================================
# Linear sRGB ↔ OKLab
# =============================================================================

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# Non-linear LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_srgb_to_oklab(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert linear sRGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    lms = np.einsum('...j,ij->...i', rgb, _M1)
    # Signed cube root keeps out-of-gamut colors invertible
    return np.einsum('...j,ij->...i', np.cbrt(lms), _M2)


def oklab_to_linear_srgb(lab: ArrayLike) -> NDArray[np.float64]:
    """Convert OKLab to linear sRGB. Inverse of linear_srgb_to_oklab."""
    lab = np.asarray(lab, dtype=np.float64)
    lms = np.einsum('...j,ij->...i', lab, _M2_INV) ** 3
    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: ArrayLike) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH.

    Returns:
        Array of shape (..., 3) with (L, C, H), H in degrees [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)
    a = lab[..., 1]
    b = lab[..., 2]
    chroma = np.hypot(a, b)
    hue = np.degrees(np.arctan2(b, a)) % 360.0
    return np.stack([lab[..., 0], chroma, hue], axis=-1)


def oklch_to_oklab(lch: ArrayLike) -> NDArray[np.float64]:
    """Convert OKLCH (H in degrees) to OKLab."""
    lch = np.asarray(lch, dtype=np.float64)
    hue = np.radians(lch[..., 2])
    chroma = lch[..., 1]
    return np.stack([lch[..., 0], chroma * np.cos(hue), chroma * np.sin(hue)], axis=-1)

# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Built-in color types: sRGB, linear sRGB, OKLab and OKLCH."""

from huecast.spaces.types import LinSrgb, Oklab, OklabHue, Oklch, Srgb

__all__ = ["Srgb", "LinSrgb", "Oklab", "Oklch", "OklabHue"]

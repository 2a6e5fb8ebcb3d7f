# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Exception hierarchy for huecast."""

from __future__ import annotations


class HuecastError(Exception):
    """Base class for all huecast errors."""


class ArrayCastDeriveError(HuecastError):
    """The layout generator reported diagnostics for a type.

    Attributes:
        diagnostics: Every diagnostic the generator produced, in order.
    """

    def __init__(self, type_name: str, diagnostics) -> None:
        self.type_name = type_name
        self.diagnostics = tuple(diagnostics)
        lines = "\n".join(f"  {d}" for d in self.diagnostics)
        super().__init__(
            f"cannot derive `ArrayCast` for `{type_name}` "
            f"({len(self.diagnostics)} diagnostic(s)):\n{lines}"
        )


class MissingArrayCastError(HuecastError, TypeError):
    """A type without a layout descriptor was used where one is required."""

    def __init__(self, color_type: type) -> None:
        self.color_type = color_type
        super().__init__(
            f"`{color_type.__qualname__}` has no `ArrayCast` layout descriptor; "
            f"decorate it with `derive_array_cast`"
        )


class LayoutMismatchError(HuecastError, TypeError):
    """Two layouts that must be identical are not."""


class UndefinedConversionError(HuecastError, TypeError):
    """No unclamped conversion is declared for a pair of types."""

    def __init__(self, source: type, target: type) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"no unclamped conversion from `{source.__qualname__}` "
            f"to `{target.__qualname__}` is declared"
        )


class ReleasedBufferError(HuecastError, ValueError):
    """A color buffer was used after its storage was handed to another buffer."""

# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
The `ArrayCast` layout generator.

Checks that a declared type is laid out like ``[C; N]`` and, if it is,
emits its layout descriptor. Checks run in a fixed order:

1. Shape: enums and unions are rejected outright (fatal).
2. Layout attribute: a fixed "C" or "transparent" layout is required.
3. Channels: fields in declaration order, minus excluded fields, with type
   overrides applied.
4. Homogeneity: every channel must have the type of the first one. Each
   offending field gets its own diagnostic.
5. Non-empty: at least one channel must remain (fatal).
6. Emission: the descriptor is emitted together with every diagnostic from
   steps 2 and 4, so a single run reports everything it found.

The generator never raises for a bad declaration; diagnostics are values.
Deciding what to do with them is up to the caller (see ``decorator.apply``
and the command-line tool).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from huecast.cast.array_cast import ArrayCast, ArrayShape
from huecast.derive.schema import TypeDeclaration, TypeKind
from huecast.errors import ArrayCastDeriveError

logger = logging.getLogger(__name__)

# Module paths the rendered code imports the descriptor definition from.
# The library's own types use the defining module so that generated code
# never imports through the package root.
INTERNAL_IMPORT_PATH = "huecast.cast.array_cast"
EXTERNAL_IMPORT_PATH = "huecast.cast"

GENERATED_HEADER = "# Generated by huecast.derive. Do not edit."


class DiagnosticKind(Enum):
    """Categories of generator diagnostics."""

    UNSUPPORTED_SHAPE = "unsupported_shape"
    MISSING_LAYOUT_GUARANTEE = "missing_layout_guarantee"
    NO_CHANNEL_FIELDS = "no_channel_fields"
    MISMATCHED_CHANNEL_TYPE = "mismatched_channel_type"

    @property
    def fatal(self) -> bool:
        """True if this kind prevents any descriptor from being emitted."""
        return self in (DiagnosticKind.UNSUPPORTED_SHAPE, DiagnosticKind.NO_CHANNEL_FIELDS)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    A problem found in a type declaration.

    Attributes:
        kind: Diagnostic category
        type_name: The declared type
        message: Human-readable description
        field: Offending field, for per-field diagnostics
    """
    kind: DiagnosticKind
    type_name: str
    message: str
    field: Optional[str] = None

    @property
    def location(self) -> str:
        if self.field is None:
            return self.type_name
        return f"{self.type_name}.{self.field}"

    def __str__(self) -> str:
        return f"error[{self.kind.value}]: {self.location}: {self.message}"

    def to_dict(self) -> dict:
        d = {"kind": self.kind.value, "type": self.type_name, "message": self.message}
        if self.field is not None:
            d["field"] = self.field
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Diagnostic:
        return cls(
            kind=DiagnosticKind(data["kind"]),
            type_name=data["type"],
            message=data["message"],
            field=data.get("field"),
        )


@dataclass(frozen=True, slots=True)
class ArrayCastImpl:
    """
    An emitted layout descriptor implementation.

    Attributes:
        type_name: Qualified name of the type it is for
        module: Module the type is importable from
        array: The equivalent array type
        fields: Channel field names in array order
        internal: Address the descriptor definition the way the library's
            own types do
    """
    type_name: str
    module: str
    array: ArrayShape
    fields: tuple[str, ...]
    internal: bool = False

    @property
    def import_path(self) -> str:
        return INTERNAL_IMPORT_PATH if self.internal else EXTERNAL_IMPORT_PATH

    def descriptor(self) -> ArrayCast:
        return ArrayCast(array=self.array, fields=self.fields)

    def render_statement(self) -> str:
        """The installation statement for this type (no imports)."""
        fields = ", ".join(repr(name) for name in self.fields)
        if len(self.fields) == 1:
            fields += ","
        return (
            f"implement_array_cast(\n"
            f"    {self.type_name},\n"
            f"    ArrayCast(\n"
            f"        array=ArrayShape({self.array.channel_type!r}, {self.array.length}),\n"
            f"        fields=({fields}),\n"
            f"    ),\n"
            f")\n"
        )

    def render(self) -> str:
        """Render a standalone module installing this descriptor."""
        return render_module([self])


@dataclass(frozen=True)
class DeriveResult:
    """
    Everything one generator run produced.

    ``implementation`` and ``diagnostics`` may both be present: the
    generator still emits a descriptor when channels resolved, alongside
    any non-fatal diagnostics.
    """
    declaration: TypeDeclaration
    implementation: Optional[ArrayCastImpl]
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        """True if a descriptor was emitted and nothing was reported."""
        return self.implementation is not None and not self.diagnostics

    def require(self) -> ArrayCastImpl:
        """
        The implementation, treating every diagnostic as fatal.

        Raises:
            ArrayCastDeriveError: If any diagnostic was reported
        """
        if not self.ok:
            raise ArrayCastDeriveError(self.declaration.name, self.diagnostics)
        return self.implementation


def _unsupported_shape(declaration: TypeDeclaration) -> Optional[Diagnostic]:
    if declaration.kind is TypeKind.ENUM:
        message = "`ArrayCast` cannot be derived for enums, because of the discriminant"
    elif declaration.kind is TypeKind.UNION:
        message = "`ArrayCast` cannot be derived for unions"
    else:
        return None
    return Diagnostic(DiagnosticKind.UNSUPPORTED_SHAPE, declaration.name, message)


def derive(declaration: TypeDeclaration, *, internal: bool = False) -> DeriveResult:
    """
    Run the layout generator on a declaration.

    Args:
        declaration: The type to derive for
        internal: Render code for the library's own types

    Returns:
        DeriveResult with the descriptor (if channels resolved) and every
        diagnostic found
    """
    name = declaration.name

    shape_error = _unsupported_shape(declaration)
    if shape_error is not None:
        logger.warning("%s", shape_error)
        return DeriveResult(declaration, None, (shape_error,))

    diagnostics: list[Diagnostic] = []

    if not declaration.has_fixed_layout:
        diagnostics.append(Diagnostic(
            DiagnosticKind.MISSING_LAYOUT_GUARANTEE,
            name,
            f"a `fixed_layout('C')` or `fixed_layout('transparent')` attribute "
            f"is required to give `{name}` a fixed memory layout",
        ))

    channels = [
        (f.name, declaration.overrides.get(f.name, f.type))
        for f in declaration.fields
        if f.name not in declaration.exclude
    ]

    channel_type: Optional[str] = None
    for field_name, resolved in channels:
        if channel_type is None:
            channel_type = resolved
        elif resolved != channel_type:
            diagnostics.append(Diagnostic(
                DiagnosticKind.MISMATCHED_CHANNEL_TYPE,
                name,
                f"expected fields to have type `{channel_type}`",
                field=field_name,
            ))

    if channel_type is None:
        diagnostics.append(Diagnostic(
            DiagnosticKind.NO_CHANNEL_FIELDS,
            name,
            "`ArrayCast` can only be derived for structs with one or more fields",
        ))
        _log_diagnostics(diagnostics)
        return DeriveResult(declaration, None, tuple(diagnostics))

    implementation = ArrayCastImpl(
        type_name=name,
        module=declaration.module,
        array=ArrayShape(channel_type, len(channels)),
        fields=tuple(field_name for field_name, _ in channels),
        internal=internal,
    )
    logger.debug("Derived ArrayCast for %s: %s", name, implementation.array)
    _log_diagnostics(diagnostics)
    return DeriveResult(declaration, implementation, tuple(diagnostics))


def _log_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        logger.warning("%s", diagnostic)


def render_module(implementations: Iterable[ArrayCastImpl]) -> str:
    """
    Render one module installing several descriptors.

    All implementations must use the same addressing mode.
    """
    implementations = list(implementations)
    modes = {impl.internal for impl in implementations}
    if len(modes) > 1:
        raise ValueError("Cannot mix internal and external implementations in one module")
    import_path = implementations[0].import_path if implementations else EXTERNAL_IMPORT_PATH

    lines = [
        GENERATED_HEADER,
        "",
        f"from {import_path} import ArrayCast, ArrayShape, implement_array_cast",
    ]

    imports: dict[str, list[str]] = {}
    for impl in implementations:
        top_level = impl.type_name.split(".")[0]
        names = imports.setdefault(impl.module, [])
        if top_level not in names:
            names.append(top_level)
    if imports:
        lines.append("")
    for module, names in imports.items():
        lines.append(f"from {module} import {', '.join(names)}")

    for impl in implementations:
        lines.append("")
        lines.append(impl.render_statement().rstrip("\n"))

    return "\n".join(lines) + "\n"

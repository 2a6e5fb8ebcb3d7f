# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Layout generator for the ``ArrayCast`` descriptor.

Use ``derive_array_cast`` on a class, or run ``python -m huecast.derive``
on a schema file to generate descriptors ahead of time.
"""

from huecast.derive.array_cast import (
    ArrayCastImpl,
    DeriveResult,
    Diagnostic,
    DiagnosticKind,
    derive,
    render_module,
)
from huecast.derive.decorator import DeriveConfig, apply, derive_array_cast
from huecast.derive.schema import (
    FieldDeclaration,
    TypeDeclaration,
    TypeKind,
    declaration_from_type,
    fixed_layout,
    load_declarations,
    same_layout_as,
    zero_sized,
)

__all__ = [
    # Generator
    "derive",
    "DeriveResult",
    "ArrayCastImpl",
    "Diagnostic",
    "DiagnosticKind",
    "render_module",
    # Application
    "derive_array_cast",
    "apply",
    "DeriveConfig",
    # Declarations
    "TypeDeclaration",
    "FieldDeclaration",
    "TypeKind",
    "declaration_from_type",
    "load_declarations",
    "fixed_layout",
    "zero_sized",
    "same_layout_as",
]

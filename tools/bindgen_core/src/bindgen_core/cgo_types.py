from __future__ import annotations

import enum

from .errors import (
    UnsupportedPointerTarget,
    UnsupportedScalarKind,
    UnsupportedSliceElement,
    UnsupportedTypeShape,
)
from .model import Basic, ErrorType, Named, Pointer, Slice, TypeRef, normalize_scalar_kind

STRING_KIND = "string"
BYTE_KIND = "uint8"
REFNUM_TYPE = "int32_t"

SCALAR_TYPE_MAP = {
    "bool": "char",
    "untyped bool": "char",
    "int": "nint",
    "int8": "int8_t",
    "int16": "int16_t",
    "int32": "int32_t",
    "untyped rune": "int32_t",
    "int64": "int64_t",
    "untyped int": "int64_t",
    "float32": "float",
    "float64": "double",
    "untyped float": "double",
    STRING_KIND: "nstring",
}

BYTE_SLICE_TYPE = "nbyteslice"


class TypeClass(enum.Enum):
    SCALAR = "scalar"
    BYTE_SEQUENCE = "byte_sequence"
    POINTER_TO_NAMED = "pointer_to_named"
    NAMED_OPAQUE = "named_opaque"
    ERROR_LIKE = "error_like"
    UNSUPPORTED = "unsupported"


def is_error_type(t: TypeRef) -> bool:
    return isinstance(t, ErrorType)


def classify_type(t: TypeRef) -> TypeClass:
    if is_error_type(t):
        return TypeClass.ERROR_LIKE
    if isinstance(t, Basic):
        return TypeClass.SCALAR
    if isinstance(t, Slice):
        elem = t.elem
        if isinstance(elem, Basic) and normalize_scalar_kind(elem.kind) == BYTE_KIND:
            return TypeClass.BYTE_SEQUENCE
        return TypeClass.UNSUPPORTED
    if isinstance(t, Pointer):
        # error is a named type too; *error unwraps to the error mapping.
        if isinstance(t.elem, (Named, ErrorType)):
            return TypeClass.POINTER_TO_NAMED
        return TypeClass.UNSUPPORTED
    if isinstance(t, Named):
        return TypeClass.NAMED_OPAQUE
    return TypeClass.UNSUPPORTED


def cgo_type(t: TypeRef) -> str:
    """Return the name of the C type used to pass a value of type t."""
    cls = classify_type(t)
    if cls is TypeClass.ERROR_LIKE:
        return cgo_type(Basic(STRING_KIND))
    if cls is TypeClass.SCALAR:
        kind = normalize_scalar_kind(t.kind)
        mapped = SCALAR_TYPE_MAP.get(kind)
        if mapped is None:
            raise UnsupportedScalarKind(f"unsupported basic type: {kind}", kind)
        return mapped
    if cls is TypeClass.BYTE_SEQUENCE:
        return BYTE_SLICE_TYPE
    if cls is TypeClass.POINTER_TO_NAMED:
        return cgo_type(t.elem)
    if cls is TypeClass.NAMED_OPAQUE:
        return REFNUM_TYPE

    desc = str(t)
    if isinstance(t, Slice):
        raise UnsupportedSliceElement(f"unsupported slice type: {desc}", desc)
    if isinstance(t, Pointer):
        raise UnsupportedPointerTarget(f"unsupported pointer to type: {desc}", desc)
    raise UnsupportedTypeShape(f"unsupported type: {desc}", desc)

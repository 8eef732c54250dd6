"""Resolved package model consumed by the generator.

The model is a read-only snapshot of one package's scope: each object has a
kind and, for types, an underlying shape. Type references use source-level
shapes; the type mapper decides which of them can cross the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

SCALAR_ALIASES = {
    "byte": "uint8",
    "rune": "int32",
}


def normalize_scalar_kind(kind: str) -> str:
    return SCALAR_ALIASES.get(kind, kind)


def is_exported_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


@dataclass(frozen=True)
class Basic:
    kind: str

    def __str__(self) -> str:
        return self.kind


@dataclass(frozen=True)
class Slice:
    elem: TypeRef

    def __str__(self) -> str:
        return f"[]{self.elem}"


@dataclass(frozen=True)
class Pointer:
    elem: TypeRef

    def __str__(self) -> str:
        return f"*{self.elem}"


@dataclass(frozen=True)
class Named:
    name: str
    # "struct", "interface" or the description of any other underlying type.
    underlying: str = "struct"
    package: str = ""

    def __str__(self) -> str:
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


@dataclass(frozen=True)
class ErrorType:
    def __str__(self) -> str:
        return "error"


@dataclass(frozen=True)
class OtherType:
    description: str

    def __str__(self) -> str:
        return self.description


TypeRef = Union[Basic, Slice, Pointer, Named, ErrorType, OtherType]


@dataclass(frozen=True)
class Var:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class Signature:
    params: tuple[Var, ...] = ()
    results: tuple[Var, ...] = ()


@dataclass(frozen=True)
class FuncObject:
    name: str
    signature: Signature = field(default_factory=Signature)

    @property
    def exported(self) -> bool:
        return is_exported_name(self.name)


@dataclass(frozen=True)
class Struct:
    fields: tuple[Var, ...] = ()
    methods: tuple[FuncObject, ...] = ()


@dataclass(frozen=True)
class Interface:
    methods: tuple[FuncObject, ...] = ()
    # Names of interfaces embedded in this one, resolved against the package.
    embedded: tuple[str, ...] = ()


@dataclass(frozen=True)
class InterfaceSummary:
    callable: tuple[FuncObject, ...]
    implementable: bool


@dataclass(frozen=True)
class TypeNameObject:
    name: str
    underlying: Union[Struct, Interface, TypeRef]
    summary: InterfaceSummary | None = None

    @property
    def exported(self) -> bool:
        return is_exported_name(self.name)


@dataclass(frozen=True)
class ConstObject:
    name: str
    type: TypeRef
    value: str = ""

    @property
    def exported(self) -> bool:
        return is_exported_name(self.name)


@dataclass(frozen=True)
class VarObject:
    name: str
    type: TypeRef

    @property
    def exported(self) -> bool:
        return is_exported_name(self.name)


@dataclass(frozen=True)
class OtherObject:
    name: str
    kind: str

    @property
    def exported(self) -> bool:
        return is_exported_name(self.name)


ScopeObject = Union[FuncObject, TypeNameObject, ConstObject, VarObject, OtherObject]


@dataclass(frozen=True)
class Package:
    path: str
    name: str
    # Scope objects in enumeration order.
    objects: tuple[ScopeObject, ...] = ()

    def lookup(self, name: str) -> ScopeObject | None:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None

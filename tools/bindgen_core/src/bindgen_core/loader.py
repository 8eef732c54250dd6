from __future__ import annotations

from pathlib import Path
from typing import Any

from .common import load_json_object, validate_with_schema
from .errors import BindgenError
from .model import (
    Basic,
    ConstObject,
    ErrorType,
    FuncObject,
    Interface,
    InterfaceSummary,
    Named,
    OtherObject,
    OtherType,
    Package,
    Pointer,
    ScopeObject,
    Signature,
    Slice,
    Struct,
    TypeNameObject,
    TypeRef,
    Var,
    VarObject,
)

SCHEMA_KIND = "package_model"


def parse_type(raw: dict[str, Any]) -> TypeRef:
    kind = raw["kind"]
    if kind == "basic":
        return Basic(raw["name"])
    if kind == "slice":
        return Slice(parse_type(raw["elem"]))
    if kind == "pointer":
        return Pointer(parse_type(raw["elem"]))
    if kind == "named":
        return Named(raw["name"], raw.get("underlying", "struct"), raw.get("package", ""))
    if kind == "error":
        return ErrorType()
    if kind == "other":
        return OtherType(raw["description"])
    raise BindgenError(f"type kind '{kind}' is not supported")


def parse_vars(raw: list[dict[str, Any]] | None) -> tuple[Var, ...]:
    return tuple(Var(str(item.get("name") or ""), parse_type(item["type"])) for item in raw or [])


def parse_func(raw: dict[str, Any]) -> FuncObject:
    return FuncObject(
        raw["name"],
        Signature(parse_vars(raw.get("params")), parse_vars(raw.get("results"))),
    )


def parse_underlying(raw: dict[str, Any]) -> Struct | Interface | TypeRef:
    kind = raw["kind"]
    if kind == "struct":
        return Struct(
            fields=parse_vars(raw.get("fields")),
            methods=tuple(parse_func(item) for item in raw.get("methods") or []),
        )
    if kind == "interface":
        return Interface(
            methods=tuple(parse_func(item) for item in raw.get("methods") or []),
            embedded=tuple(raw.get("embedded") or []),
        )
    return parse_type(raw)


def parse_summary(raw: dict[str, Any] | None) -> InterfaceSummary | None:
    if raw is None:
        return None
    return InterfaceSummary(
        callable=tuple(parse_func(item) for item in raw["methods"]),
        implementable=bool(raw["implementable"]),
    )


def parse_object(raw: dict[str, Any]) -> ScopeObject:
    kind = raw["kind"]
    name = raw["name"]
    if kind == "func":
        return parse_func(raw)
    if kind == "type":
        return TypeNameObject(name, parse_underlying(raw["underlying"]), parse_summary(raw.get("summary")))
    if kind == "const":
        return ConstObject(name, parse_type(raw["type"]), str(raw.get("value", "")))
    if kind == "var":
        return VarObject(name, parse_type(raw["type"]))
    return OtherObject(name, kind)


def parse_package_model(payload: dict[str, Any], label: str = "package model") -> Package:
    validate_with_schema(SCHEMA_KIND, payload, label)
    return Package(
        path=payload["path"],
        name=payload["name"],
        objects=tuple(parse_object(item) for item in payload["objects"]),
    )


def load_package_model(path: Path) -> Package:
    return parse_package_model(load_json_object(path), f"'{path}'")

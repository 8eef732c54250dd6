from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .cgo_types import REFNUM_TYPE, cgo_type
from .lifetime import VarMode, param_mode, result_mode, to_c_flag
from .model import FuncObject, Signature, TypeRef
from .names import param_name
from .printer import Printer

NAME_PREFIX = "proxy"
RETURN_SUFFIX = "return"
REFNUM_PARAM = "refnum"


@dataclass(frozen=True)
class Conversion:
    mode: VarMode
    copy_string: bool
    copy_slice: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "copy_string": to_c_flag(self.copy_string),
            "copy_slice": to_c_flag(self.copy_slice),
        }


@dataclass(frozen=True)
class ParamSpec:
    name: str
    type: TypeRef
    c_type: str
    mode: VarMode

    def conversion(self) -> Conversion:
        # Both the pre-call and the post-call conversion of this value go
        # through here, so they always agree on the mode.
        return Conversion(self.mode, self.mode.copy_string(), self.mode.copy_slice())

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "go_type": str(self.type),
            "c_type": self.c_type,
            **self.conversion().as_dict(),
        }


@dataclass(frozen=True)
class ResultSpec:
    type: TypeRef
    c_type: str
    mode: VarMode = VarMode.RETURNED

    def conversion(self) -> Conversion:
        return Conversion(self.mode, self.mode.copy_string(), self.mode.copy_slice())

    def as_dict(self) -> dict[str, Any]:
        return {
            "go_type": str(self.type),
            "c_type": self.c_type,
            **self.conversion().as_dict(),
        }


@dataclass(frozen=True)
class RecordField:
    name: str
    type: TypeRef
    c_type: str


@dataclass(frozen=True)
class AggregateReturnRecord:
    name: str
    fields: tuple[RecordField, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fields": [{"name": f.name, "c_type": f.c_type} for f in self.fields],
        }


@dataclass(frozen=True)
class CSignature:
    """Boundary form of one function or method."""

    name: str
    params: tuple[ParamSpec, ...]
    results: tuple[ResultSpec, ...]
    record: AggregateReturnRecord | None
    receiver: bool

    @property
    def result_types(self) -> tuple[str, ...]:
        return tuple(res.c_type for res in self.results)

    @property
    def return_type(self) -> str:
        if self.record is not None:
            return f"struct {self.record.name}"
        if self.results:
            return self.results[0].c_type
        return "void"

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "receiver": self.receiver,
            "return_type": self.return_type,
            "parameters": [p.as_dict() for p in self.params],
            "results": [r.as_dict() for r in self.results],
            "return_record": self.record.as_dict() if self.record else None,
        }


def proxy_name(pkg_prefix: str, member: str, enclosing: str | None = None) -> str:
    if enclosing:
        return f"{NAME_PREFIX}_{pkg_prefix}_{enclosing}_{member}"
    return f"{NAME_PREFIX}_{pkg_prefix}_{member}"


def build_signature(name: str, sig: Signature, *, receiver: bool, proxy: bool) -> CSignature:
    """Map sig onto the boundary vocabulary.

    Raises UnsupportedTypeError subclasses from the type mapper; nothing is
    returned for a signature with an unrepresentable type.
    """
    pmode = param_mode(proxy)
    params = tuple(
        ParamSpec(param_name(sig.params, i), var.type, cgo_type(var.type), pmode)
        for i, var in enumerate(sig.params)
    )
    results = tuple(ResultSpec(var.type, cgo_type(var.type), result_mode()) for var in sig.results)

    record = None
    if len(results) > 1:
        record = AggregateReturnRecord(
            f"{name}_{RETURN_SUFFIX}",
            tuple(RecordField(f"r{i}", res.type, res.c_type) for i, res in enumerate(results)),
        )
    return CSignature(name, params, results, record, receiver)


def build_method_signature(m: FuncObject, iname: str, pkg_prefix: str, *, proxy: bool) -> CSignature:
    return build_signature(proxy_name(pkg_prefix, m.name, iname), m.signature, receiver=True, proxy=proxy)


def build_func_signature(f: FuncObject, pkg_prefix: str) -> CSignature:
    return build_signature(proxy_name(pkg_prefix, f.name), f.signature, receiver=False, proxy=False)


def write_record(p: Printer, record: AggregateReturnRecord) -> None:
    p.printf("typedef struct %s {\n", record.name)
    p.indent()
    for f in record.fields:
        p.printf("%s %s;\n", f.c_type, f.name)
    p.outdent()
    p.printf("} %s;\n", record.name)


def write_signature(p: Printer, csig: CSignature, header: bool) -> None:
    """Write csig as a declaration (header) or as the opening of a definition."""
    if header and csig.record is not None:
        write_record(p, csig.record)

    args: list[str] = []
    if csig.receiver:
        args.append(f"{REFNUM_TYPE} {REFNUM_PARAM}")
    args.extend(f"{param.c_type} {param.name}" for param in csig.params)

    p.printf("%s %s(%s)", csig.return_type, csig.name, ", ".join(args) or "void")
    if header:
        p.printf(";\n")
    else:
        p.printf(" {\n")

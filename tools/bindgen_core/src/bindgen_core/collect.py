from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from .errors import (
    EmptyExportedSurface,
    ErrorList,
    UnresolvedEmbeddedInterface,
    UnsupportedConstType,
    UnsupportedSymbolKind,
)
from .model import (
    Basic,
    ConstObject,
    FuncObject,
    Interface,
    InterfaceSummary,
    Named,
    OtherObject,
    Package,
    Pointer,
    Slice,
    Struct,
    TypeNameObject,
    TypeRef,
    VarObject,
    is_exported_name,
)

BindablePredicate = Callable[[FuncObject], bool]


@dataclass(frozen=True)
class StructInfo:
    obj: TypeNameObject
    struct: Struct

    @property
    def name(self) -> str:
        return self.obj.name


@dataclass(frozen=True)
class InterfaceInfo:
    obj: TypeNameObject
    iface: Interface
    summary: InterfaceSummary

    @property
    def name(self) -> str:
        return self.obj.name


BindableSymbol = Union[FuncObject, StructInfo, InterfaceInfo]


@dataclass
class Worklists:
    funcs: list[FuncObject] = field(default_factory=list)
    structs: list[StructInfo] = field(default_factory=list)
    interfaces: list[InterfaceInfo] = field(default_factory=list)
    constants: list[ConstObject] = field(default_factory=list)
    vars: list[VarObject] = field(default_factory=list)
    other_names: list[TypeNameObject] = field(default_factory=list)
    # Functions, structs and interfaces in enumeration order; emission order.
    bindable: list[BindableSymbol] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            "functions": [item.name for item in self.funcs],
            "structs": [item.name for item in self.structs],
            "interfaces": [item.name for item in self.interfaces],
            "constants": [item.name for item in self.constants],
            "variables": [item.name for item in self.vars],
            "other_names": [item.name for item in self.other_names],
        }


def _type_is_exported(t: TypeRef) -> bool:
    if isinstance(t, (Pointer, Slice)):
        return _type_is_exported(t.elem)
    if isinstance(t, Named):
        return is_exported_name(t.name)
    return True


def is_bindable(func: FuncObject) -> bool:
    """A function is bindable when every named type in its signature is exported."""
    sig = func.signature
    return all(_type_is_exported(var.type) for var in (*sig.params, *sig.results))


def _collect_interface_methods(
    iface: Interface,
    package: Package,
    methods: dict[str, FuncObject],
    seen: set[str],
    unresolved: list[str],
) -> None:
    for method in iface.methods:
        methods.setdefault(method.name, method)
    for name in iface.embedded:
        if name in seen:
            continue
        seen.add(name)
        obj = package.lookup(name)
        if not isinstance(obj, TypeNameObject) or not isinstance(obj.underlying, Interface):
            unresolved.append(name)
            continue
        _collect_interface_methods(obj.underlying, package, methods, seen, unresolved)


def make_interface_summary(
    iface: Interface,
    package: Package,
    bindable: BindablePredicate = is_bindable,
    errors: ErrorList | None = None,
    iname: str = "",
) -> InterfaceSummary:
    """Method closure of iface over the interfaces it embeds.

    Embedded interfaces that are not declared in package leave the closure
    incomplete: the summary is then not implementable, and the missing names
    are recorded in errors, or raised when no error list is given.
    """
    methods: dict[str, FuncObject] = {}
    unresolved: list[str] = []
    _collect_interface_methods(iface, package, methods, set(), unresolved)
    for name in unresolved:
        message = f"embedded interface {name} of {iname or 'interface'} is not declared in package \"{package.path}\""
        if errors is None:
            raise UnresolvedEmbeddedInterface(message)
        errors.errorf(UnresolvedEmbeddedInterface, message)
    ordered = [methods[name] for name in sorted(methods)]
    return InterfaceSummary(
        callable=tuple(m for m in ordered if m.exported and bindable(m)),
        implementable=not unresolved and all(m.exported and bindable(m) for m in ordered),
    )


def collect_symbols(
    package: Package,
    errors: ErrorList,
    bindable: BindablePredicate = is_bindable,
) -> Worklists:
    """Classify the exported scope of package into generation worklists.

    Unsupported constants and object kinds are recorded in errors and
    skipped; collection always runs to the end of the scope.
    """
    work = Worklists()
    has_exported = False
    for obj in package.objects:
        if not obj.exported:
            continue
        has_exported = True
        if isinstance(obj, FuncObject):
            if bindable(obj):
                work.funcs.append(obj)
                work.bindable.append(obj)
        elif isinstance(obj, TypeNameObject):
            underlying = obj.underlying
            if isinstance(underlying, Struct):
                info = StructInfo(obj, underlying)
                work.structs.append(info)
                work.bindable.append(info)
            elif isinstance(underlying, Interface):
                summary = obj.summary or make_interface_summary(underlying, package, bindable, errors, obj.name)
                info = InterfaceInfo(obj, underlying, summary)
                work.interfaces.append(info)
                work.bindable.append(info)
            else:
                work.other_names.append(obj)
        elif isinstance(obj, ConstObject):
            if not isinstance(obj.type, Basic):
                errors.errorf(UnsupportedConstType, f"unsupported exported const for {obj.name}: {obj.type}")
                continue
            work.constants.append(obj)
        elif isinstance(obj, VarObject):
            work.vars.append(obj)
        else:
            kind = obj.kind if isinstance(obj, OtherObject) else type(obj).__name__
            errors.errorf(UnsupportedSymbolKind, f"unsupported exported type for {obj.name}: {kind}")
    if not has_exported:
        errors.errorf(EmptyExportedSurface, f"no exported names in the package \"{package.path}\"")
    return work

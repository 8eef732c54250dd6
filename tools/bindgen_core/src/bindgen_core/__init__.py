from .cgo_types import TypeClass, cgo_type, classify_type, is_error_type
from .collect import InterfaceInfo, StructInfo, Worklists, collect_symbols, is_bindable, make_interface_summary
from .common import load_json_object, write_if_changed
from .errors import (
    BindgenError,
    EmptyExportedSurface,
    ErrorList,
    UnresolvedEmbeddedInterface,
    UnsupportedConstType,
    UnsupportedPointerTarget,
    UnsupportedScalarKind,
    UnsupportedSliceElement,
    UnsupportedSymbolKind,
    UnsupportedTypeError,
    UnsupportedTypeShape,
)
from .generator import Generator, GeneratorOptions
from .lifetime import VarMode, copy_slice, copy_string, to_c_flag
from .loader import load_package_model, parse_package_model
from .names import param_name, resolve_param_name
from .printer import Printer
from .signatures import AggregateReturnRecord, CSignature, ParamSpec, build_signature, write_signature

__all__ = [
    "AggregateReturnRecord",
    "BindgenError",
    "CSignature",
    "EmptyExportedSurface",
    "ErrorList",
    "Generator",
    "GeneratorOptions",
    "InterfaceInfo",
    "ParamSpec",
    "Printer",
    "StructInfo",
    "TypeClass",
    "UnresolvedEmbeddedInterface",
    "UnsupportedConstType",
    "UnsupportedPointerTarget",
    "UnsupportedScalarKind",
    "UnsupportedSliceElement",
    "UnsupportedSymbolKind",
    "UnsupportedTypeError",
    "UnsupportedTypeShape",
    "VarMode",
    "Worklists",
    "build_signature",
    "cgo_type",
    "classify_type",
    "collect_symbols",
    "copy_slice",
    "copy_string",
    "is_bindable",
    "is_error_type",
    "load_json_object",
    "load_package_model",
    "make_interface_summary",
    "param_name",
    "parse_package_model",
    "resolve_param_name",
    "to_c_flag",
    "write_if_changed",
    "write_signature",
]

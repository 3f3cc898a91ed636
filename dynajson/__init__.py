"""Dynamically-typed navigation and mutation of parsed JSON documents."""

from typing import TypeAlias

from ._core import (
    configuration as _configuration,
    diagnostics as _diagnostics,
    element as _element,
    errors as _errors,
    json_path as _json_path,
    loading as _loading,
    logging as _logging,
    serialization as _serialization,
    value as _value,
)

__version__ = '1.0.0'

ArrayVisitor: TypeAlias = _element.ArrayVisitor
Diagnostic: TypeAlias = _diagnostics.Diagnostic
DiagnosticHandler: TypeAlias = _diagnostics.DiagnosticHandler
Element: TypeAlias = _element.Element
ElementError: TypeAlias = _errors.ElementError
ElementPolicy: TypeAlias = _diagnostics.ElementPolicy
ElementTypeError: TypeAlias = _errors.ElementTypeError
JsonPath: TypeAlias = _json_path.JsonPath
JsonValue: TypeAlias = _value.JsonValue
LevelRangeFilter: TypeAlias = _logging.LevelRangeFilter
LoadError: TypeAlias = _errors.LoadError
LoaderConfiguration: TypeAlias = _configuration.LoaderConfiguration
LoggingDiagnosticHandler: TypeAlias = _logging.LoggingDiagnosticHandler
ObjectVisitor: TypeAlias = _element.ObjectVisitor
ParseError: TypeAlias = _errors.ParseError
ReadOnlyError: TypeAlias = _errors.ReadOnlyError
Severity: TypeAlias = _diagnostics.Severity
StateError: TypeAlias = _errors.StateError
Traversal: TypeAlias = _element.Traversal
ValueKind: TypeAlias = _value.ValueKind
WalkStep: TypeAlias = _element.WalkStep
WalkVisitor: TypeAlias = _element.WalkVisitor
check_value = _value.check_value
classify = _value.classify
configure_logging = _logging.configure_logging
escape_string = _serialization.escape_string
load = _element.Element.load
new_array_root = _element.Element.new_array_root
new_object_root = _element.Element.new_object_root
parse = _element.Element.parse
parse_json = _loading.parse_json
read_source = _loading.read_source
serialize = _serialization.serialize

"""Produce .proto descriptions of the type models in a domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gnostic.generator.domain import Domain
from gnostic.generator.naming import camel_case_to_snake_case
from gnostic.generator.types import TypeModel

_INDENTATION = "  "

_PROTO_TYPES = {
    "int": "int64",
    "float": "double",
    "blob": "string",
}

_DISPLAY_NAMES = {
    "$ref": "_ref",
    "$schema": "_schema",
}


@dataclass
class ProtoOption:
    """An option to be declared in a generated .proto file."""

    name: str
    value: str
    comment: str = ""


class _Code:
    """Accumulates lines of generated text with indentation."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._depth = 0

    def print(self, line: Optional[str] = None) -> None:
        if line is None:
            self._lines.append("\n")
        else:
            self._lines.append(_INDENTATION * self._depth + line + "\n")

    def indent(self) -> None:
        self._depth += 1

    def outdent(self) -> None:
        self._depth -= 1

    @property
    def text(self) -> str:
        return "".join(self._lines)


def _option_declaration(code: _Code, option: ProtoOption) -> None:
    for comment_line in option.comment.split("\n"):
        code.print(comment_line)
    if option.value in ("true", "false"):
        value = option.value
    else:
        value = f'"{option.value}"'
    code.print(f"option {option.name} = {value};\n")


def _field_name(property_name: str) -> str:
    return camel_case_to_snake_case(_DISPLAY_NAMES.get(property_name, property_name))


def _message(code: _Code, type_name: str, type_model: TypeModel) -> None:
    if type_model.comment:
        code.print(f"// {type_model.comment}")
    code.print(f"message {type_name} {{")
    code.indent()
    if type_model.one_of_wrapper:
        code.print("oneof oneof {")
        code.indent()
    for field_number, prop in enumerate(type_model.properties, start=1):
        if prop.comment:
            code.print(f"// {prop.comment}")
        property_type = _PROTO_TYPES.get(prop.type, prop.type)
        line = f"{property_type} {_field_name(prop.name)} = {field_number};"
        if prop.repeated:
            line = "repeated " + line
        code.print(line)
    if type_model.one_of_wrapper:
        code.outdent()
        code.print("}")
    code.outdent()
    code.print("}")
    code.print()


def generate_proto(
    domain: Domain,
    package_name: str,
    header: str,
    options: Iterable[ProtoOption],
    imports: Optional[Iterable[str]],
) -> str:
    """Return the text of a .proto file describing the domain's types."""
    code = _Code()
    code.print(header)
    code.print("// THIS FILE IS AUTOMATICALLY GENERATED.")
    code.print()
    code.print('syntax = "proto3";')
    code.print()
    code.print(f"package {package_name};")
    for import_name in imports or ():
        code.print()
        code.print(f'import "{import_name}";')
    code.print()
    for option in options:
        _option_declaration(code, option)
    for type_name in domain.sorted_type_names():
        _message(code, type_name, domain.type_models[type_name])
    return code.text
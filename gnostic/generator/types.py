"""Models of the types that are built from a schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from gnostic.generator.naming import snake_case_to_camel_case, title
from gnostic.jsonschema.models import Schema


@dataclass
class TypeRequest:
    """A type met while building a model that has no named schema."""

    name: str
    property_name: str
    schema: Schema
    one_of_wrapper: bool = False


@dataclass
class TypeProperty:
    """A property (field) of a modelled type."""

    name: str = ""
    type: str = ""
    string_enum_values: Optional[list[str]] = None
    map_type: str = ""
    repeated: bool = False
    pattern: str = ""
    implicit: bool = False
    comment: str = ""

    def description(self) -> str:
        """Return a one-line text description of the property."""
        result = f"\t// {self.comment}\n" if self.comment else ""
        if self.repeated:
            result += f"\t{self.name} {self.type} repeated {self.pattern}\n"
        else:
            result += f"\t{self.name} {self.type} {self.pattern} \n"
        return result

    def field_name(self) -> str:
        """Return the message field name to use for the property."""
        if self.name == "$ref":
            return "XRef"
        return title(snake_case_to_camel_case(self.name))


@dataclass
class TypeModel:
    """A modelled type."""

    name: str = ""
    properties: list[TypeProperty] = field(default_factory=list)
    required: list[str] = field(default_factory=list)
    one_of_wrapper: bool = False
    open: bool = False
    open_patterns: Optional[list[str]] = None
    is_string_array: bool = False
    is_item_array: bool = False
    is_blob: bool = False
    is_pair: bool = False
    pair_value_type: str = ""
    comment: str = ""

    def add_property(self, prop: TypeProperty) -> None:
        """Append a property."""
        self.properties.append(prop)

    def description(self) -> str:
        """Return a text description of the type and its properties."""
        result = f"// {self.comment}\n" if self.comment else ""
        wrapper_info = " oneof wrapper" if self.one_of_wrapper else ""
        result += f"{self.name}{wrapper_info}\n"
        result += "".join(prop.description() for prop in self.properties)
        return result

    def is_required(self, property_name: str) -> bool:
        """Return True if the named property is required."""
        return property_name in self.required
"""Data model for JSON Schemas and their combination values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class SchemaNumber:
    """A number that is either an integer or a float."""

    integer: Optional[int] = None
    float: Optional[float] = None


@dataclass
class SchemaOrBoolean:
    """A value that is either a schema or a boolean."""

    schema: Optional["Schema"] = None
    boolean: Optional[bool] = None


@dataclass
class StringOrStringArray:
    """A value that is either a string or a list of strings."""

    string: Optional[str] = None
    string_array: Optional[list[str]] = None

    def description(self) -> str:
        """Return the string, or the array joined with commas."""
        if self.string is not None:
            return self.string
        if self.string_array is not None:
            return ", ".join(self.string_array)
        return ""


@dataclass
class SchemaOrStringArray:
    """A value that is either a schema or a list of strings."""

    schema: Optional["Schema"] = None
    string_array: Optional[list[str]] = None


@dataclass
class SchemaOrSchemaArray:
    """A value that is either a schema or a list of schemas."""

    schema: Optional["Schema"] = None
    schema_array: Optional[list["Schema"]] = None


@dataclass
class SchemaEnumValue:
    """A value that may appear in a schema enumeration."""

    string: Optional[str] = None
    bool: Optional[bool] = None


@dataclass
class NamedSchema:
    """A name-schema pair, used to keep map keys in order."""

    name: str
    value: "Schema"


@dataclass
class NamedSchemaOrStringArray:
    """A name-value pair, used to keep map keys in order."""

    name: str
    value: SchemaOrStringArray


def _named_element(pairs: Optional[list[NamedSchema]], name: str) -> Optional["Schema"]:
    if pairs is None:
        return None
    return next((pair.value for pair in pairs if pair.name == name), None)


@dataclass(eq=False)
class Schema:
    """A JSON Schema; every member is None when it is not specified."""

    schema: Optional[str] = None
    id: Optional[str] = None
    ref: Optional[str] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None

    multiple_of: Optional[SchemaNumber] = None
    maximum: Optional[SchemaNumber] = None
    exclusive_maximum: Optional[bool] = None
    minimum: Optional[SchemaNumber] = None
    exclusive_minimum: Optional[bool] = None

    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None

    additional_items: Optional[SchemaOrBoolean] = None
    items: Optional[SchemaOrSchemaArray] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None

    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    required: Optional[list[str]] = None
    additional_properties: Optional[SchemaOrBoolean] = None
    properties: Optional[list[NamedSchema]] = None
    pattern_properties: Optional[list[NamedSchema]] = None
    dependencies: Optional[list[NamedSchemaOrStringArray]] = None

    enumeration: Optional[list[SchemaEnumValue]] = None
    type: Optional[StringOrStringArray] = None
    all_of: Optional[list["Schema"]] = None
    any_of: Optional[list["Schema"]] = None
    one_of: Optional[list["Schema"]] = None
    not_: Optional["Schema"] = None
    definitions: Optional[list[NamedSchema]] = None

    title: Optional[str] = None
    description: Optional[str] = None
    default: Optional[Any] = None

    format: Optional[str] = None

    def property_with_name(self, name: str) -> Optional["Schema"]:
        """Return the property schema with the given name, if any."""
        return _named_element(self.properties, name)

    def pattern_property_with_name(self, name: str) -> Optional["Schema"]:
        """Return the pattern property schema with the given pattern, if any."""
        return _named_element(self.pattern_properties, name)

    def definition_with_name(self, name: str) -> Optional["Schema"]:
        """Return the definition with the given name, if any."""
        return _named_element(self.definitions, name)

    def add_property(self, name: str, prop: "Schema") -> None:
        """Append a named property schema."""
        if self.properties is None:
            self.properties = []
        self.properties.append(NamedSchema(name, prop))
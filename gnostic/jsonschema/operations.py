"""Operations that inspect, merge and resolve Schemas."""

from __future__ import annotations

import logging
from typing import Callable

from gnostic.jsonschema.display import describe
from gnostic.jsonschema.models import NamedSchema, Schema
from gnostic.jsonschema.reader import SCHEMAS

log = logging.getLogger(__name__)

SchemaOperation = Callable[[Schema, str], None]

_MEMBERS = (
    "schema",
    "id",
    "multiple_of",
    "maximum",
    "exclusive_maximum",
    "minimum",
    "exclusive_minimum",
    "max_length",
    "min_length",
    "pattern",
    "additional_items",
    "items",
    "max_items",
    "min_items",
    "unique_items",
    "max_properties",
    "min_properties",
    "required",
    "additional_properties",
    "properties",
    "pattern_properties",
    "dependencies",
    "enumeration",
    "type",
    "all_of",
    "any_of",
    "one_of",
    "not_",
    "definitions",
    "title",
    "description",
    "default",
    "format",
    "ref",
)

OFFICIAL_SCHEMA_PROPERTIES = "http://json-schema.org/draft-04/schema#/properties/"


def is_empty(schema: Schema) -> bool:
    """Return True if no member of the schema is specified."""
    return all(getattr(schema, name) is None for name in _MEMBERS)


def is_equal(schema: Schema, other: Schema) -> bool:
    """Return True if two schemas have the same description."""
    return describe(schema) == describe(other)


def type_is(schema: Schema, type_name: str) -> bool:
    """Return True if the schema's type is or includes the given type."""
    if schema.type is None:
        return False
    if schema.type.string is not None:
        return schema.type.string == type_name
    if schema.type.string_array is not None:
        return type_name in schema.type.string_array
    return False


def copy_properties(schema: Schema, source: Schema) -> None:
    """Copy every specified member of source onto schema."""
    for name in _MEMBERS:
        value = getattr(source, name)
        if value is not None:
            setattr(schema, name, value)


def apply_to_schemas(schema: Schema, operation: SchemaOperation, context: str) -> None:
    """Apply an operation to every schema inside schema, then to schema itself."""
    if schema.additional_items is not None and schema.additional_items.schema is not None:
        apply_to_schemas(schema.additional_items.schema, operation, "AdditionalItems")
    if schema.items is not None:
        if schema.items.schema_array is not None:
            for item in schema.items.schema_array:
                apply_to_schemas(item, operation, "Items.SchemaArray")
        elif schema.items.schema is not None:
            apply_to_schemas(schema.items.schema, operation, "Items.Schema")
    if (
        schema.additional_properties is not None
        and schema.additional_properties.schema is not None
    ):
        apply_to_schemas(schema.additional_properties.schema, operation, "AdditionalProperties")
    for pair in schema.properties or ():
        apply_to_schemas(pair.value, operation, "Properties")
    for pair in schema.pattern_properties or ():
        apply_to_schemas(pair.value, operation, "PatternProperties")
    for pair in schema.dependencies or ():
        if pair.value.schema is not None:
            apply_to_schemas(pair.value.schema, operation, "Dependencies")
    for member in schema.all_of or ():
        apply_to_schemas(member, operation, "AllOf")
    for member in schema.any_of or ():
        apply_to_schemas(member, operation, "AnyOf")
    for member in schema.one_of or ():
        apply_to_schemas(member, operation, "OneOf")
    if schema.not_ is not None:
        apply_to_schemas(schema.not_, operation, "Not")
    for pair in schema.definitions or ():
        apply_to_schemas(pair.value, operation, "Definitions")
    operation(schema, context)


def _named(pairs: list[NamedSchema] | None, name: str) -> Schema | None:
    result = None
    for pair in pairs or ():
        if pair.name == name:
            result = pair.value
    return result


def resolve_json_pointer(schema: Schema, ref: str) -> Schema:
    """Resolve a JSON pointer against the known schemas.

    Only whole documents and "/definitions/x" or "/properties/x" paths
    are supported. Raises ValueError when the pointer cannot be resolved.
    """
    result = None
    parts = ref.split("#")
    if len(parts) == 2:
        document_name = parts[0] + "#"
        if document_name == "#" and schema.id is not None:
            document_name = schema.id
        document = SCHEMAS.get(document_name)
        path_parts = parts[1].split("/")
        if document is not None:
            if len(path_parts) == 1:
                result = document
            elif len(path_parts) == 3:
                if path_parts[1] == "definitions":
                    result = _named(document.definitions, path_parts[2])
                elif path_parts[1] == "properties":
                    result = _named(document.properties, path_parts[2])
    if result is None:
        raise ValueError(f"unresolved pointer: {ref}")
    return result


def resolve_refs(schema: Schema) -> None:
    """Replace "$ref" members by the schemas they point to.

    References to object types, references inside a oneOf, and references
    to schemas holding a oneOf or additionalProperties are kept.
    """
    root = schema
    count = 1
    while count > 0:
        count = 0

        def substitute(target: Schema, context: str) -> None:
            nonlocal count
            if target.ref is None:
                return
            try:
                resolved = resolve_json_pointer(root, target.ref)
            except ValueError as error:
                log.warning("%s", error)
                return
            if type_is(resolved, "object"):
                return
            if context == "OneOf":
                return
            if resolved.one_of is not None or resolved.additional_properties is not None:
                return
            target.ref = None
            copy_properties(target, resolved)
            count += 1

        apply_to_schemas(schema, substitute, "")


def resolve_all_ofs(schema: Schema) -> None:
    """Merge the members of every "allOf" into the schema that holds it."""

    def merge(target: Schema, context: str) -> None:
        if target.all_of is not None:
            for member in target.all_of:
                copy_properties(target, member)
            target.all_of = None

    apply_to_schemas(schema, merge, "resolveAllOfs")


def resolve_any_ofs(schema: Schema) -> None:
    """Turn every "anyOf" into a "oneOf"."""

    def convert(target: Schema, context: str) -> None:
        if target.any_of is not None:
            target.one_of = target.any_of
            target.any_of = None

    apply_to_schemas(schema, convert, "resolveAnyOfs")


def copy_official_schema_property(schema: Schema, name: str) -> None:
    """Add a property referring to the named draft-04 meta-schema property."""
    schema.add_property(name, Schema(ref=OFFICIAL_SCHEMA_PROPERTIES + name))


def copy_official_schema_properties(schema: Schema, names: list[str]) -> None:
    """Add properties referring to the named draft-04 meta-schema properties."""
    for name in names:
        copy_official_schema_property(schema, name)
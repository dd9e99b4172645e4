"""Text descriptions of Schemas, one keyword per line."""

from __future__ import annotations

import math
from typing import Any, Optional

import yaml

from gnostic.jsonschema.models import Schema, SchemaNumber

_STEP = "  "


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _format_float(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_number(number: SchemaNumber) -> str:
    if number.integer is not None:
        return str(number.integer)
    if number.float is not None:
        return _format_float(number.float)
    return ""


def _format_default(value: Any) -> str:
    if isinstance(value, yaml.ScalarNode):
        return value.value
    if isinstance(value, yaml.Node):
        text = yaml.serialize(value).strip()
        if text.endswith("..."):
            text = text[:-3].strip()
        return text
    if isinstance(value, bool):
        return _format_bool(value)
    return str(value)


def _id_key(schema_uri: Optional[str]) -> str:
    trimmed = (schema_uri or "").removesuffix("#")
    if trimmed in ("http://json-schema.org/draft-04/schema#", "#", ""):
        return "id"
    return "$id"


def _describe(schema: Schema, indent: str) -> str:
    lines: list[str] = []
    add = lines.append
    inner = indent + _STEP
    nested = inner + _STEP

    if schema.schema is not None:
        add(f"{indent}$schema: {schema.schema}\n")
    if schema.read_only:
        add(f"{indent}readOnly: true\n")
    if schema.write_only:
        add(f"{indent}writeOnly: true\n")
    if schema.id is not None:
        add(f"{indent}{_id_key(schema.schema)}: {schema.id}\n")
    if schema.multiple_of is not None:
        add(f"{indent}multipleOf: {_format_number(schema.multiple_of)}\n")
    if schema.maximum is not None:
        add(f"{indent}maximum: {_format_number(schema.maximum)}\n")
    if schema.exclusive_maximum is not None:
        add(f"{indent}exclusiveMaximum: {_format_bool(schema.exclusive_maximum)}\n")
    if schema.minimum is not None:
        add(f"{indent}minimum: {_format_number(schema.minimum)}\n")
    if schema.exclusive_minimum is not None:
        add(f"{indent}exclusiveMinimum: {_format_bool(schema.exclusive_minimum)}\n")
    if schema.max_length is not None:
        add(f"{indent}maxLength: {schema.max_length}\n")
    if schema.min_length is not None:
        add(f"{indent}minLength: {schema.min_length}\n")
    if schema.pattern is not None:
        add(f"{indent}pattern: {schema.pattern}\n")
    if schema.additional_items is not None:
        if schema.additional_items.schema is not None:
            add(f"{indent}additionalItems:\n")
            add(_describe(schema.additional_items.schema, inner))
        else:
            add(f"{indent}additionalItems: {_format_bool(bool(schema.additional_items.boolean))}\n")
    if schema.items is not None:
        add(f"{indent}items:\n")
        if schema.items.schema_array is not None:
            for position, item in enumerate(schema.items.schema_array):
                add(f"{inner}{position}:\n")
                add(_describe(item, nested))
        elif schema.items.schema is not None:
            add(_describe(schema.items.schema, nested))
    if schema.max_items is not None:
        add(f"{indent}maxItems: {schema.max_items}\n")
    if schema.min_items is not None:
        add(f"{indent}minItems: {schema.min_items}\n")
    if schema.unique_items is not None:
        add(f"{indent}uniqueItems: {_format_bool(schema.unique_items)}\n")
    if schema.max_properties is not None:
        add(f"{indent}maxProperties: {schema.max_properties}\n")
    if schema.min_properties is not None:
        add(f"{indent}minProperties: {schema.min_properties}\n")
    if schema.required is not None:
        add(f"{indent}required: [{' '.join(schema.required)}]\n")
    if schema.additional_properties is not None:
        if schema.additional_properties.schema is not None:
            add(f"{indent}additionalProperties:\n")
            add(_describe(schema.additional_properties.schema, inner))
        else:
            flag = bool(schema.additional_properties.boolean)
            add(f"{indent}additionalProperties: {_format_bool(flag)}\n")
    if schema.properties is not None:
        add(f"{indent}properties:\n")
        for pair in schema.properties:
            add(f"{inner}{pair.name}:\n")
            add(_describe(pair.value, nested))
    if schema.pattern_properties is not None:
        add(f"{indent}patternProperties:\n")
        for pair in schema.pattern_properties:
            add(f"{inner}{pair.name}:\n")
            add(_describe(pair.value, nested))
    if schema.dependencies is not None:
        add(f"{indent}dependencies:\n")
        for pair in schema.dependencies:
            if pair.value.schema is not None:
                add(f"{inner}{pair.name}:\n")
                add(_describe(pair.value.schema, nested))
            elif pair.value.string_array is not None:
                add(f"{inner}{pair.name}:\n")
                lines.extend(f"{nested}{text}\n" for text in pair.value.string_array)
    if schema.enumeration is not None:
        add(f"{indent}enumeration:\n")
        for value in schema.enumeration:
            if value.string is not None:
                add(f"{inner}{value.string}\n")
            else:
                add(f"{inner}{_format_bool(bool(value.bool))}\n")
    if schema.type is not None:
        add(f"{indent}type: {schema.type.description()}\n")
    for keyword, members in (
        ("allOf", schema.all_of),
        ("anyOf", schema.any_of),
        ("oneOf", schema.one_of),
    ):
        if members is not None:
            add(f"{indent}{keyword}:\n")
            for member in members:
                add(_describe(member, inner))
                add(f"{indent}-\n")
    if schema.not_ is not None:
        add(f"{indent}not:\n")
        add(_describe(schema.not_, inner))
    if schema.definitions is not None:
        add(f"{indent}definitions:\n")
        for pair in schema.definitions:
            add(f"{inner}{pair.name}:\n")
            add(_describe(pair.value, nested))
    if schema.title is not None:
        add(f"{indent}title: {schema.title}\n")
    if schema.description is not None:
        add(f"{indent}description: {schema.description}\n")
    if schema.default is not None:
        add(f"{indent}default:\n")
        add(f"{indent}  {_format_default(schema.default)}\n")
    if schema.format is not None:
        add(f"{indent}format: {schema.format}\n")
    if schema.ref is not None:
        add(f"{indent}$ref: {schema.ref}\n")
    return "".join(lines)


def describe(schema: Schema) -> str:
    """Return a multi-line text description of a schema."""
    return _describe(schema, "")
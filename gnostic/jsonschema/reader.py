"""Read JSON Schemas from JSON or YAML text into Schema objects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from gnostic.jsonschema.base import base_schema_text
from gnostic.jsonschema.models import (
    NamedSchema,
    NamedSchemaOrStringArray,
    Schema,
    SchemaEnumValue,
    SchemaNumber,
    SchemaOrBoolean,
    SchemaOrSchemaArray,
    SchemaOrStringArray,
    StringOrStringArray,
)

log = logging.getLogger(__name__)

SCHEMAS: dict[str, Schema] = {}
"""Every schema read so far that carries an id, keyed by that id."""

_TAG_PREFIX = "tag:yaml.org,2002:"
_TRUE_WORDS = {"1", "t", "true", "y", "yes", "on"}


def _tag(node: yaml.Node) -> str:
    tag = node.tag or ""
    if tag.startswith(_TAG_PREFIX):
        return tag[len(_TAG_PREFIX):]
    if tag.startswith("!!"):
        return tag[2:]
    return tag


def _parse_bool(text: str) -> bool:
    return text.lower() in _TRUE_WORDS


def _parse_int(text: str) -> int:
    try:
        return int(text, 10)
    except ValueError:
        return 0


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _unexpected(where: str, node: yaml.Node) -> None:
    log.warning("%s: unexpected node %r", where, node)


def _string_value(node: yaml.Node) -> Optional[str]:
    if isinstance(node, yaml.ScalarNode):
        return node.value
    _unexpected("stringValue", node)
    return None


def _number_value(node: yaml.Node) -> Optional[SchemaNumber]:
    if isinstance(node, yaml.ScalarNode):
        tag = _tag(node)
        if tag == "float":
            return SchemaNumber(float=_parse_float(node.value))
        if tag == "int":
            return SchemaNumber(integer=_parse_int(node.value))
    _unexpected("numberValue", node)
    return None


def _int_value(node: yaml.Node) -> Optional[int]:
    if isinstance(node, yaml.ScalarNode):
        tag = _tag(node)
        if tag == "float":
            return int(_parse_float(node.value))
        if tag == "int":
            return _parse_int(node.value)
    _unexpected("intValue", node)
    return None


def _bool_value(node: yaml.Node) -> Optional[bool]:
    if isinstance(node, yaml.ScalarNode) and _tag(node) == "bool":
        return _parse_bool(node.value)
    _unexpected("boolValue", node)
    return None


def _scalar_strings(node: yaml.SequenceNode, where: str) -> list[str]:
    strings: list[str] = []
    for item in node.value:
        if isinstance(item, yaml.ScalarNode):
            strings.append(item.value)
        else:
            _unexpected(where, item)
    return strings


def _map_of_schemas(node: yaml.Node) -> Optional[list[NamedSchema]]:
    if isinstance(node, yaml.MappingNode):
        return [
            NamedSchema(key.value, schema_from_node(value))
            for key, value in node.value
        ]
    _unexpected("mapOfSchemasValue", node)
    return None


def _mapping_children(node: yaml.SequenceNode, where: str) -> list[Schema]:
    schemas: list[Schema] = []
    for item in node.value:
        if isinstance(item, yaml.MappingNode):
            schemas.append(schema_from_node(item))
        else:
            _unexpected(where, item)
    return schemas


def _array_of_schemas(node: yaml.Node) -> Optional[list[Schema]]:
    if isinstance(node, yaml.SequenceNode):
        return _mapping_children(node, "arrayOfSchemasValue")
    if isinstance(node, yaml.MappingNode):
        return [schema_from_node(node)]
    _unexpected("arrayOfSchemasValue", node)
    return None


def _schema_or_schema_array(node: yaml.Node) -> Optional[SchemaOrSchemaArray]:
    if isinstance(node, yaml.SequenceNode):
        return SchemaOrSchemaArray(
            schema_array=_mapping_children(node, "schemaOrSchemaArrayValue")
        )
    if isinstance(node, yaml.MappingNode):
        return SchemaOrSchemaArray(schema=schema_from_node(node))
    _unexpected("schemaOrSchemaArrayValue", node)
    return None


def _array_of_strings(node: yaml.Node) -> Optional[list[str]]:
    if isinstance(node, yaml.ScalarNode):
        return [node.value]
    if isinstance(node, yaml.SequenceNode):
        return _scalar_strings(node, "arrayOfStringsValue")
    _unexpected("arrayOfStringsValue", node)
    return None


def _string_or_string_array(node: yaml.Node) -> Optional[StringOrStringArray]:
    if isinstance(node, yaml.ScalarNode):
        return StringOrStringArray(string=node.value)
    if isinstance(node, yaml.SequenceNode):
        return StringOrStringArray(
            string_array=_scalar_strings(node, "stringOrStringArrayValue")
        )
    _unexpected("stringOrStringArrayValue", node)
    return None


def _array_of_enum_values(node: yaml.Node) -> list[SchemaEnumValue]:
    values: list[SchemaEnumValue] = []
    if not isinstance(node, yaml.SequenceNode):
        _unexpected("arrayOfEnumValuesValue", node)
        return values
    for item in node.value:
        if not isinstance(item, yaml.ScalarNode):
            _unexpected("arrayOfEnumValuesValue", item)
            continue
        tag = _tag(item)
        if tag == "str":
            values.append(SchemaEnumValue(string=item.value))
        elif tag == "bool":
            values.append(SchemaEnumValue(bool=_parse_bool(item.value)))
        else:
            log.warning("arrayOfEnumValuesValue: unexpected type %s", item.tag)
    return values


def _map_of_schemas_or_string_arrays(node: yaml.Node) -> list[NamedSchemaOrStringArray]:
    pairs: list[NamedSchemaOrStringArray] = []
    if not isinstance(node, yaml.MappingNode):
        _unexpected("mapOfSchemasOrStringArraysValue", node)
        return pairs
    for key, value in node.value:
        if isinstance(value, yaml.SequenceNode):
            strings = _scalar_strings(value, "mapOfSchemasOrStringArraysValue")
            pairs.append(
                NamedSchemaOrStringArray(key.value, SchemaOrStringArray(string_array=strings))
            )
        else:
            _unexpected("mapOfSchemasOrStringArraysValue", value)
    return pairs


def _schema_or_boolean(node: yaml.Node) -> SchemaOrBoolean:
    if isinstance(node, yaml.ScalarNode):
        return SchemaOrBoolean(boolean=_parse_bool(node.value))
    if isinstance(node, yaml.MappingNode):
        return SchemaOrBoolean(schema=schema_from_node(node))
    _unexpected("schemaOrBooleanValue", node)
    return SchemaOrBoolean()


_FIELDS: dict[str, tuple[str, Callable[[yaml.Node], Any]]] = {
    "$schema": ("schema", _string_value),
    "id": ("id", _string_value),
    "multipleOf": ("multiple_of", _number_value),
    "maximum": ("maximum", _number_value),
    "exclusiveMaximum": ("exclusive_maximum", _bool_value),
    "minimum": ("minimum", _number_value),
    "exclusiveMinimum": ("exclusive_minimum", _bool_value),
    "maxLength": ("max_length", _int_value),
    "minLength": ("min_length", _int_value),
    "pattern": ("pattern", _string_value),
    "additionalItems": ("additional_items", _schema_or_boolean),
    "items": ("items", _schema_or_schema_array),
    "maxItems": ("max_items", _int_value),
    "minItems": ("min_items", _int_value),
    "uniqueItems": ("unique_items", _bool_value),
    "maxProperties": ("max_properties", _int_value),
    "minProperties": ("min_properties", _int_value),
    "required": ("required", _array_of_strings),
    "additionalProperties": ("additional_properties", _schema_or_boolean),
    "properties": ("properties", _map_of_schemas),
    "patternProperties": ("pattern_properties", _map_of_schemas),
    "dependencies": ("dependencies", _map_of_schemas_or_string_arrays),
    "enum": ("enumeration", _array_of_enum_values),
    "type": ("type", _string_or_string_array),
    "allOf": ("all_of", _array_of_schemas),
    "anyOf": ("any_of", _array_of_schemas),
    "oneOf": ("one_of", _array_of_schemas),
    "not": ("not_", lambda node: schema_from_node(node)),
    "definitions": ("definitions", _map_of_schemas),
    "title": ("title", _string_value),
    "description": ("description", _string_value),
    "format": ("format", _string_value),
    "$ref": ("ref", _string_value),
}


def schema_from_node(node: Optional[yaml.Node]) -> Optional[Schema]:
    """Build a Schema from a composed YAML node.

    Schemas with an id are recorded in SCHEMAS. Returns None when the
    node is not a mapping.
    """
    if not isinstance(node, yaml.MappingNode):
        _unexpected("schemaValue", node)
        return None
    schema = Schema()
    for key_node, value_node in node.value:
        key = key_node.value if isinstance(key_node, yaml.ScalarNode) else ""
        if key == "default":
            # the default value is kept as the raw node
            schema.default = value_node
            continue
        entry = _FIELDS.get(key)
        if entry is None:
            log.warning("UNSUPPORTED (%s)", key)
            continue
        attribute, convert = entry
        setattr(schema, attribute, convert(value_node))
    if schema.id is not None:
        SCHEMAS[schema.id] = schema
    return schema


def schema_from_text(text: str) -> Optional[Schema]:
    """Parse JSON or YAML text into a Schema.

    Raises yaml.YAMLError when the text cannot be parsed.
    """
    return schema_from_node(yaml.compose(text, Loader=yaml.SafeLoader))


def schema_from_file(filename: Union[str, Path]) -> Optional[Schema]:
    """Read a Schema from a JSON or YAML file."""
    return schema_from_text(Path(filename).read_text(encoding="utf-8"))


def new_base_schema() -> Optional[Schema]:
    """Build the draft-04 meta-schema from its embedded text."""
    return schema_from_text(base_schema_text())
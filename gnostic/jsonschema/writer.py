"""Write Schemas back out as YAML node trees and JSON text."""

from __future__ import annotations

from typing import Optional

import yaml

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

INDENTATION = "  "

_TAG_PREFIX = "tag:yaml.org,2002:"

Pairs = list[tuple[yaml.Node, yaml.Node]]


def _tag_name(node: yaml.Node) -> str:
    tag = node.tag or ""
    if tag.startswith(_TAG_PREFIX):
        return tag[len(_TAG_PREFIX):]
    if tag.startswith("!!"):
        return tag[2:]
    return tag


def _render_scalar(node: yaml.ScalarNode) -> str:
    if _tag_name(node) == "bool":
        return node.value
    return '"' + node.value + '"'


def _render_mapping(node: yaml.MappingNode, indent: str) -> str:
    inner = indent + INDENTATION
    parts = ["{\n"]
    pairs = node.value
    for position, (key_node, value) in enumerate(pairs):
        parts.append(f'{inner}"{key_node.value}": ')
        if isinstance(value, yaml.ScalarNode):
            parts.append(_render_scalar(value))
        elif isinstance(value, yaml.MappingNode):
            parts.append(_render_mapping(value, inner))
        elif isinstance(value, yaml.SequenceNode):
            parts.append(_render_sequence(value, inner))
        else:
            parts.append(f"???MapItem(Key:{value!r}, Value:{type(value).__name__})")
        if position < len(pairs) - 1:
            parts.append(",")
        parts.append("\n")
    parts.append(indent + "}")
    return "".join(parts)


def _render_sequence(node: yaml.SequenceNode, indent: str) -> str:
    inner = indent + INDENTATION
    parts = ["[\n"]
    items = node.value
    for position, item in enumerate(items):
        if isinstance(item, yaml.ScalarNode):
            parts.append(inner + _render_scalar(item))
        elif isinstance(item, yaml.MappingNode):
            parts.append(inner + _render_mapping(item, inner))
        else:
            parts.append(inner + f"???ArrayItem({item!r})")
        if position < len(items) - 1:
            parts.append(",")
        parts.append("\n")
    parts.append(indent + "]")
    return "".join(parts)


def render(node: yaml.Node) -> str:
    """Render a mapping or sequence node as JSON text; other nodes give ""."""
    if isinstance(node, yaml.MappingNode):
        return _render_mapping(node, "") + "\n"
    if isinstance(node, yaml.SequenceNode):
        return _render_sequence(node, "") + "\n"
    return ""


def _node_for_string(value: str) -> yaml.ScalarNode:
    return yaml.ScalarNode(tag=_TAG_PREFIX + "str", value=value)


def _node_for_bool(value: bool) -> yaml.ScalarNode:
    return yaml.ScalarNode(tag=_TAG_PREFIX + "bool", value="true" if value else "false")


def _node_for_int(value: int) -> yaml.ScalarNode:
    return yaml.ScalarNode(tag=_TAG_PREFIX + "int", value=str(value))


def _node_for_float(value: float) -> yaml.ScalarNode:
    return yaml.ScalarNode(tag=_TAG_PREFIX + "float", value=f"{value:f}")


def _node_for_sequence(items: list[Optional[yaml.Node]]) -> yaml.SequenceNode:
    return yaml.SequenceNode(
        tag=_TAG_PREFIX + "seq", value=[item for item in items if item is not None]
    )


def _node_for_mapping(pairs: Pairs) -> yaml.MappingNode:
    return yaml.MappingNode(tag=_TAG_PREFIX + "map", value=pairs)


def _node_for_string_array(strings: list[str]) -> yaml.SequenceNode:
    return _node_for_sequence([_node_for_string(text) for text in strings])


def _node_for_schema_array(schemas: list[Schema]) -> yaml.SequenceNode:
    return _node_for_sequence([schema_to_node(item) for item in schemas])


def _number_node(number: SchemaNumber) -> Optional[yaml.Node]:
    if number.integer is not None:
        return _node_for_int(number.integer)
    if number.float is not None:
        return _node_for_float(number.float)
    return None


def _schema_or_boolean_node(value: SchemaOrBoolean) -> Optional[yaml.Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.boolean is not None:
        return _node_for_bool(value.boolean)
    return None


def _string_or_string_array_node(value: StringOrStringArray) -> Optional[yaml.Node]:
    if value.string is not None:
        return _node_for_string(value.string)
    if value.string_array is not None:
        return _node_for_string_array(value.string_array)
    return None


def _schema_or_string_array_node(value: SchemaOrStringArray) -> Optional[yaml.Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.string_array is not None:
        return _node_for_string_array(value.string_array)
    return None


def _schema_or_schema_array_node(value: SchemaOrSchemaArray) -> Optional[yaml.Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.schema_array is not None:
        return _node_for_schema_array(value.schema_array)
    return None


def _enum_value_node(value: SchemaEnumValue) -> Optional[yaml.Node]:
    if value.string is not None:
        return _node_for_string(value.string)
    if value.bool is not None:
        return _node_for_bool(value.bool)
    return None


def _append(pairs: Pairs, name: str, value: Optional[yaml.Node]) -> None:
    if value is not None:
        pairs.append((_node_for_string(name), value))


def _named_schemas_node(named: list[NamedSchema]) -> yaml.MappingNode:
    pairs: Pairs = []
    for pair in named:
        _append(pairs, pair.name, schema_to_node(pair.value))
    return _node_for_mapping(pairs)


def _named_dependencies_node(named: list[NamedSchemaOrStringArray]) -> yaml.MappingNode:
    pairs: Pairs = []
    for pair in named:
        _append(pairs, pair.name, _schema_or_string_array_node(pair.value))
    return _node_for_mapping(pairs)


def _id_key(schema_uri: Optional[str]) -> str:
    trimmed = (schema_uri or "").removesuffix("#")
    if trimmed in ("http://json-schema.org/draft-04/schema", "#", ""):
        return "id"
    return "$id"


def schema_to_node(schema: Schema) -> yaml.MappingNode:
    """Build a YAML mapping node describing a schema; defaults are left out."""
    pairs: Pairs = []
    if schema.title is not None:
        _append(pairs, "title", _node_for_string(schema.title))
    if schema.id is not None:
        _append(pairs, _id_key(schema.schema), _node_for_string(schema.id))
    if schema.schema is not None:
        _append(pairs, "$schema", _node_for_string(schema.schema))
    if schema.read_only:
        _append(pairs, "readOnly", _node_for_bool(True))
    if schema.write_only:
        _append(pairs, "writeOnly", _node_for_bool(True))
    if schema.type is not None:
        _append(pairs, "type", _string_or_string_array_node(schema.type))
    if schema.items is not None:
        _append(pairs, "items", _schema_or_schema_array_node(schema.items))
    if schema.description is not None:
        _append(pairs, "description", _node_for_string(schema.description))
    if schema.required is not None:
        _append(pairs, "required", _node_for_string_array(schema.required))
    if schema.additional_properties is not None:
        _append(pairs, "additionalProperties", _schema_or_boolean_node(schema.additional_properties))
    if schema.pattern_properties is not None:
        _append(pairs, "patternProperties", _named_schemas_node(schema.pattern_properties))
    if schema.properties is not None:
        _append(pairs, "properties", _named_schemas_node(schema.properties))
    if schema.dependencies is not None:
        _append(pairs, "dependencies", _named_dependencies_node(schema.dependencies))
    if schema.ref is not None:
        _append(pairs, "$ref", _node_for_string(schema.ref))
    if schema.multiple_of is not None:
        _append(pairs, "multipleOf", _number_node(schema.multiple_of))
    if schema.maximum is not None:
        _append(pairs, "maximum", _number_node(schema.maximum))
    if schema.exclusive_maximum is not None:
        _append(pairs, "exclusiveMaximum", _node_for_bool(schema.exclusive_maximum))
    if schema.minimum is not None:
        _append(pairs, "minimum", _number_node(schema.minimum))
    if schema.exclusive_minimum is not None:
        _append(pairs, "exclusiveMinimum", _node_for_bool(schema.exclusive_minimum))
    if schema.max_length is not None:
        _append(pairs, "maxLength", _node_for_int(schema.max_length))
    if schema.min_length is not None:
        _append(pairs, "minLength", _node_for_int(schema.min_length))
    if schema.pattern is not None:
        _append(pairs, "pattern", _node_for_string(schema.pattern))
    if schema.additional_items is not None:
        _append(pairs, "additionalItems", _schema_or_boolean_node(schema.additional_items))
    if schema.max_items is not None:
        _append(pairs, "maxItems", _node_for_int(schema.max_items))
    if schema.min_items is not None:
        _append(pairs, "minItems", _node_for_int(schema.min_items))
    if schema.unique_items is not None:
        _append(pairs, "uniqueItems", _node_for_bool(schema.unique_items))
    if schema.max_properties is not None:
        _append(pairs, "maxProperties", _node_for_int(schema.max_properties))
    if schema.min_properties is not None:
        _append(pairs, "minProperties", _node_for_int(schema.min_properties))
    if schema.enumeration is not None:
        _append(pairs, "enum", _node_for_sequence([_enum_value_node(v) for v in schema.enumeration]))
    if schema.all_of is not None:
        _append(pairs, "allOf", _node_for_schema_array(schema.all_of))
    if schema.any_of is not None:
        _append(pairs, "anyOf", _node_for_schema_array(schema.any_of))
    if schema.one_of is not None:
        _append(pairs, "oneOf", _node_for_schema_array(schema.one_of))
    if schema.not_ is not None:
        _append(pairs, "not", schema_to_node(schema.not_))
    if schema.definitions is not None:
        _append(pairs, "definitions", _named_schemas_node(schema.definitions))
    if schema.format is not None:
        _append(pairs, "format", _node_for_string(schema.format))
    return _node_for_mapping(pairs)


def json_string(schema: Schema) -> str:
    """Return a JSON representation of a schema."""
    return render(schema_to_node(schema))
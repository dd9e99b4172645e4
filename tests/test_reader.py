import logging

import pytest
import yaml

from gnostic.jsonschema.models import SchemaEnumValue
from gnostic.jsonschema.reader import (
    SCHEMAS,
    new_base_schema,
    schema_from_file,
    schema_from_node,
    schema_from_text,
)


def test_simple_string_fields():
    schema = schema_from_text(
        '{"title": "Pet", "description": "A pet", "pattern": "^a", '
        '"format": "uri", "$ref": "#/definitions/pet"}'
    )
    assert schema.title == "Pet"
    assert schema.description == "A pet"
    assert schema.pattern == "^a"
    assert schema.format == "uri"
    assert schema.ref == "#/definitions/pet"


def test_type_as_string_and_array():
    single = schema_from_text('{"type": "string"}')
    assert single.type.string == "string"
    assert single.type.string_array is None
    many = schema_from_text('{"type": ["string", "null"]}')
    assert many.type.string_array == ["string", "null"]
    assert many.type.string is None


def test_numbers_keep_integer_or_float():
    schema = schema_from_text('{"maximum": 10, "minimum": 1.5, "multipleOf": 2}')
    assert schema.maximum.integer == 10
    assert schema.maximum.float is None
    assert schema.minimum.float == 1.5
    assert schema.minimum.integer is None
    assert schema.multiple_of.integer == 2


def test_int_fields_truncate_floats():
    schema = schema_from_text('{"maxLength": 3.9, "minItems": 2}')
    assert schema.max_length == 3
    assert schema.min_items == 2


def test_bool_fields():
    schema = schema_from_text(
        '{"uniqueItems": true, "exclusiveMaximum": false, "exclusiveMinimum": true}'
    )
    assert schema.unique_items is True
    assert schema.exclusive_maximum is False
    assert schema.exclusive_minimum is True


def test_bool_field_with_string_value_is_dropped():
    schema = schema_from_text('{"uniqueItems": "yes please"}')
    assert schema.unique_items is None


def test_required_scalar_becomes_list():
    assert schema_from_text('{"required": "name"}').required == ["name"]
    assert schema_from_text('{"required": ["a", "b"]}').required == ["a", "b"]


def test_enum_keeps_strings_and_bools_only():
    schema = schema_from_text('{"enum": ["a", true, 3]}')
    assert schema.enumeration == [
        SchemaEnumValue(string="a"),
        SchemaEnumValue(bool=True),
    ]


def test_properties_keep_order():
    schema = schema_from_text(
        '{"properties": {"zeta": {"type": "string"}, "alpha": {"type": "integer"}}}'
    )
    assert [pair.name for pair in schema.properties] == ["zeta", "alpha"]
    assert schema.property_with_name("alpha").type.string == "integer"


def test_items_schema_or_array():
    single = schema_from_text('{"items": {"type": "string"}}')
    assert single.items.schema.type.string == "string"
    assert single.items.schema_array is None
    many = schema_from_text('{"items": [{"type": "string"}, 5, {"type": "integer"}]}')
    assert [item.type.string for item in many.items.schema_array] == ["string", "integer"]


def test_additional_properties_bool_or_schema():
    flag = schema_from_text('{"additionalProperties": false}')
    assert flag.additional_properties.boolean is False
    assert flag.additional_properties.schema is None
    nested = schema_from_text('{"additionalProperties": {"$ref": "#"}}')
    assert nested.additional_properties.schema.ref == "#"


def test_combinators_and_not():
    schema = schema_from_text(
        '{"oneOf": [{"type": "string"}, {"type": "boolean"}], '
        '"anyOf": {"type": "number"}, "allOf": [], "not": {"type": "null"}}'
    )
    assert [s.type.string for s in schema.one_of] == ["string", "boolean"]
    assert [s.type.string for s in schema.any_of] == ["number"]
    assert schema.all_of == []
    assert schema.not_.type.string == "null"


def test_dependencies_with_string_arrays():
    schema = schema_from_text('{"dependencies": {"a": ["b", "c"], "d": {"type": "x"}}}')
    assert [pair.name for pair in schema.dependencies] == ["a"]
    assert schema.dependencies[0].value.string_array == ["b", "c"]


def test_default_keeps_node():
    schema = schema_from_text('{"default": {"x": 1}}')
    assert isinstance(schema.default, yaml.MappingNode)
    assert schema.default.value[0][0].value == "x"


def test_schema_with_id_is_registered():
    schema = schema_from_text('{"id": "urn:test:registered", "type": "object"}')
    assert SCHEMAS["urn:test:registered"] is schema


def test_nested_schemas_with_id_are_registered():
    schema = schema_from_text(
        '{"definitions": {"inner": {"id": "urn:test:inner", "type": "string"}}}'
    )
    assert SCHEMAS["urn:test:inner"] is schema.definition_with_name("inner")


def test_unsupported_key_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        schema = schema_from_text('{"readOnly": true, "title": "T"}')
    assert schema.read_only is None
    assert schema.title == "T"
    assert "readOnly" in caplog.text


def test_non_mapping_root_gives_none():
    assert schema_from_text("[1, 2]") is None
    assert schema_from_node(None) is None


def test_invalid_text_raises():
    with pytest.raises(yaml.YAMLError):
        schema_from_text('{"type": [')


def test_yaml_input():
    schema = schema_from_text("type: object\nrequired:\n  - name\n")
    assert schema.type.string == "object"
    assert schema.required == ["name"]


def test_schema_from_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text('{"title": "FromFile", "type": "object"}', encoding="utf-8")
    schema = schema_from_file(path)
    assert schema.title == "FromFile"
    assert schema_from_file(str(path)).type.string == "object"


def test_schema_from_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        schema_from_file(tmp_path / "missing.json")


def test_new_base_schema():
    schema = new_base_schema()
    assert schema.id == schema.schema
    assert SCHEMAS[schema.id] is schema
    assert schema.type.string == "object"
    assert schema.definition_with_name("positiveInteger").minimum.integer == 0
    assert len(schema.property_with_name("type").any_of) == 2
    assert [pair.name for pair in schema.dependencies] == [
        "exclusiveMaximum",
        "exclusiveMinimum",
    ]
    assert schema.dependencies[0].value.string_array == ["maximum"]
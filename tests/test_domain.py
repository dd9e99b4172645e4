import json

import pytest

from gnostic.generator.domain import Domain
from gnostic.jsonschema.reader import schema_from_text


def _domain(document, version="v2"):
    return Domain(schema_from_text(json.dumps(document)), version)


def _built(document, version="v2"):
    domain = _domain(document, version)
    domain.build()
    return domain


def _prop(model, name):
    return next(p for p in model.properties if p.name == name)


def test_type_name_for_stub_uses_prefix():
    domain = _domain({"definitions": {}})
    domain.prefix = "X"
    assert domain.type_name_for_stub("info") == "XInfo"


def test_build_without_definitions_raises():
    domain = _domain({"type": "object"})
    with pytest.raises(ValueError, match="missing definitions section"):
        domain.build()


def test_build_without_schema_raises():
    with pytest.raises(ValueError):
        Domain(None, "v2").build()


def test_simple_definition_properties_and_required():
    domain = _built(
        {
            "definitions": {
                "info": {
                    "type": "object",
                    "description": "About the API",
                    "required": ["title"],
                    "properties": {
                        "title": {"type": "string", "description": "The title"},
                        "count": {"type": "integer"},
                        "ratio": {"type": "number"},
                        "flag": {"type": "boolean"},
                    },
                }
            }
        }
    )
    info = domain.type_models["Info"]
    assert [p.name for p in info.properties] == ["title", "count", "ratio", "flag"]
    assert [p.type for p in info.properties] == ["string", "int", "float", "bool"]
    assert info.required == ["title"]
    assert info.comment == "About the API"
    assert _prop(info, "title").comment == "The title"
    assert not info.open


def test_builtin_types_always_present():
    domain = _built({"definitions": {}})
    assert "StringArray" in domain.type_models
    any_type = domain.type_models["Any"]
    assert any_type.is_blob and any_type.open
    assert [(p.name, p.type) for p in any_type.properties] == [
        ("value", "google.protobuf.Any"),
        ("yaml", "string"),
    ]
    assert domain.type_models["StringArray"].properties[0].repeated


def test_additional_properties_true_requests_named_any():
    domain = _built(
        {"definitions": {"bag": {"type": "object", "additionalProperties": True}}}
    )
    bag = domain.type_models["Bag"]
    assert bag.open
    prop = _prop(bag, "additionalProperties")
    assert prop.type == "NamedAny"
    assert prop.map_type == "Any"
    assert prop.implicit and prop.repeated
    named = domain.type_models["NamedAny"]
    assert named.is_pair
    assert named.pair_value_type == "Any"
    assert named.comment == (
        "Automatically-generated message used to represent maps of Any "
        "as ordered (name,value) pairs."
    )
    assert [(p.name, p.type) for p in named.properties] == [("name", "string"), ("value", "Any")]


def test_anonymous_object_property_creates_type():
    domain = _built(
        {
            "definitions": {
                "outer": {
                    "type": "object",
                    "properties": {
                        "inner": {
                            "type": "object",
                            "properties": {"name": {"type": "string"}},
                        }
                    },
                }
            }
        }
    )
    assert _prop(domain.type_models["Outer"], "inner").type == "Inner"
    assert [p.name for p in domain.type_models["Inner"].properties] == ["name"]
    assert domain.object_type_requests == {}


def test_reference_property_uses_referenced_type():
    domain = _built(
        {
            "definitions": {
                "info": {
                    "type": "object",
                    "properties": {"contact": {"$ref": "#/definitions/contact"}},
                },
                "contact": {"type": "object", "properties": {}},
            }
        }
    )
    assert _prop(domain.type_models["Info"], "contact").type == "Contact"


def test_pattern_properties_with_override():
    domain = _domain(
        {
            "definitions": {
                "info": {
                    "type": "object",
                    "patternProperties": {"^x-": {"$ref": "#/definitions/vendorExtension"}},
                }
            }
        }
    )
    domain.type_name_overrides = {"VendorExtension": "Any"}
    domain.build()
    info = domain.type_models["Info"]
    assert info.open_patterns == ["^x-"]
    prop = info.properties[0]
    assert prop.type == "NamedAny"
    assert prop.map_type == "Any"
    assert prop.pattern == "^x-"
    assert prop.implicit
    assert "NamedAny" in domain.type_models


def test_one_of_wrapper():
    domain = _built(
        {
            "definitions": {
                "choice": {
                    "oneOf": [{"$ref": "#/definitions/schema"}, {"type": "boolean"}]
                },
                "schema": {"type": "object", "properties": {}},
            }
        }
    )
    choice = domain.type_models["Choice"]
    assert choice.one_of_wrapper and choice.open
    assert [(p.name, p.type) for p in choice.properties] == [
        ("schema", "Schema"),
        ("boolean", "bool"),
    ]


def test_any_of_array_of_references_is_item_array():
    domain = _built(
        {
            "definitions": {
                "items": {
                    "anyOf": [
                        {"$ref": "#/definitions/schema"},
                        {"type": "array", "items": {"$ref": "#/definitions/schema"}},
                    ]
                }
            }
        }
    )
    items = domain.type_models["Items"]
    assert items.is_item_array
    prop = items.properties[0]
    assert (prop.name, prop.type, prop.repeated) == ("schema", "Schema", True)


def test_array_property_with_string_enum():
    domain = _built(
        {
            "definitions": {
                "op": {
                    "type": "object",
                    "properties": {
                        "schemes": {
                            "type": "array",
                            "items": {"type": "string", "enum": ["http", "https"]},
                        }
                    },
                }
            }
        }
    )
    prop = _prop(domain.type_models["Op"], "schemes")
    assert prop.repeated
    assert prop.type == "string"
    assert prop.string_enum_values == ["http", "https"]


def test_reference_definition_is_open():
    domain = _built(
        {
            "definitions": {
                "reference": {
                    "type": "object",
                    "properties": {"$ref": {"type": "string"}},
                }
            }
        }
    )
    assert domain.type_models["Reference"].open


def test_empty_definition_gets_default_accessors():
    domain = _built({"definitions": {"anything": {}}})
    model = domain.type_models["Anything"]
    assert model.open
    prop = model.properties[0]
    assert prop.type == "NamedAny"
    assert not prop.implicit
    assert "NamedAny" in domain.type_models


def test_build_type_for_definition_non_object_is_none():
    domain = _domain({"definitions": {}})
    schema = schema_from_text('{"type": "string"}')
    assert domain.build_type_for_definition("Name", "name", schema) is None


def test_top_level_properties_make_document_type():
    domain = _built(
        {
            "type": "object",
            "properties": {"swagger": {"type": "string", "enum": ["2.0"]}},
            "definitions": {},
        }
    )
    document = domain.type_models["Document"]
    assert _prop(document, "swagger").string_enum_values == ["2.0"]


def test_sorted_type_names_and_description():
    domain = _built(
        {"definitions": {"zeta": {"type": "object", "properties": {"a": {"type": "string"}}}}}
    )
    names = domain.sorted_type_names()
    assert names == sorted(domain.type_models)
    text = domain.description()
    assert text.startswith("Any\n")
    assert text.index("Any\n") < text.index("StringArray\n") < text.index("Zeta\n")
    assert "\ta string  \n" in text
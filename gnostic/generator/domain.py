"""Build models of the types described by a JSON Schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from gnostic.generator.naming import title
from gnostic.generator.types import TypeModel, TypeProperty, TypeRequest
from gnostic.jsonschema.display import describe
from gnostic.jsonschema.models import Schema, StringOrStringArray
from gnostic.jsonschema.operations import is_empty, is_equal, type_is

log = logging.getLogger(__name__)

_SCALAR_TYPES = {
    "string": "string",
    "boolean": "bool",
    "number": "float",
    "integer": "int",
}


def _string_enum_values(schema: Schema) -> Optional[list[str]]:
    if schema.enumeration is None:
        return None
    return [value.string for value in schema.enumeration if value.string is not None]


def _type_name_from_types(types: Optional[StringOrStringArray]) -> Optional[str]:
    """Return an item type name for a "type" value, or None to keep the default."""
    if types is None:
        return None
    if types.string_array is not None and len(types.string_array) == 1:
        return types.string_array[0]
    if types.string_array is not None and len(types.string_array) > 1:
        return "&[" + " ".join(types.string_array) + "]"
    if types.string is not None:
        return types.string
    return "UNKNOWN"


def _schema_is_contained_in_array(s1: Schema, s2: Schema) -> bool:
    return (
        type_is(s2, "array")
        and s2.items is not None
        and s2.items.schema is not None
        and is_equal(s1, s2.items.schema)
    )


@dataclass
class Domain:
    """A collection of type models defined by a schema."""

    schema: Optional[Schema]
    version: str = ""
    prefix: str = ""
    type_models: dict[str, TypeModel] = field(default_factory=dict)
    type_name_overrides: dict[str, str] = field(default_factory=dict)
    property_name_overrides: dict[str, str] = field(default_factory=dict)
    object_type_requests: dict[str, TypeRequest] = field(default_factory=dict)
    map_type_requests: dict[str, str] = field(default_factory=dict)

    def type_name_for_stub(self, stub: str) -> str:
        """Return a capitalized name to use for a generated type."""
        return self.prefix + stub[:1].upper() + stub[1:]

    def _type_name_for_reference(self, reference: str) -> str:
        parts = reference.split("/")
        if parts[0] == "#":
            return self.type_name_for_stub(parts[-1])
        return "Schema"

    @staticmethod
    def _property_name_for_reference(reference: str) -> Optional[str]:
        parts = reference.split("/")
        if parts[0] == "#":
            return parts[-1]
        return None

    def _request_object_type(self, type_name: str, property_name: str, schema: Schema) -> None:
        self.object_type_requests[type_name] = TypeRequest(type_name, property_name, schema)

    def _add_map_property(
        self,
        type_model: TypeModel,
        name: str,
        type_name: str,
        map_type: str,
        *,
        pattern: str = "",
        implicit: bool = True,
    ) -> None:
        prop = TypeProperty(
            name=name,
            type=type_name,
            pattern=pattern,
            map_type=map_type,
            repeated=True,
            implicit=implicit,
        )
        self.map_type_requests[map_type] = map_type
        type_model.add_property(prop)

    def _array_item_type_for_schema(self, property_name: str, schema: Schema) -> str:
        item_type_name = "Any"
        items = schema.items
        if items is None:
            return item_type_name
        if items.schema_array is not None:
            if items.schema_array:
                first = items.schema_array[0]
                if first.ref is not None:
                    item_type_name = self._type_name_for_reference(first.ref)
                else:
                    item_type_name = _type_name_from_types(first.type) or item_type_name
        elif items.schema is not None:
            item_schema = items.schema
            if item_schema.ref is not None:
                item_type_name = self._type_name_for_reference(item_schema.ref)
            elif item_schema.one_of is not None:
                item_type_name = self.type_name_for_stub(property_name + "Item")
                self._request_object_type(item_type_name, property_name, item_schema)
            else:
                item_type_name = _type_name_from_types(item_schema.type) or item_type_name
        return item_type_name

    def _build_type_properties(self, type_model: TypeModel, schema: Schema) -> None:
        for pair in schema.properties or ():
            name, prop_schema = pair.name, pair.value
            comment = prop_schema.description or ""
            if prop_schema.ref is not None:
                type_model.add_property(
                    TypeProperty(name=name, type=self._type_name_for_reference(prop_schema.ref))
                )
            elif prop_schema.type is not None:
                scalar = next(
                    (kind for kind in _SCALAR_TYPES if type_is(prop_schema, kind)), None
                )
                if scalar is not None:
                    prop = TypeProperty(name=name, type=_SCALAR_TYPES[scalar], comment=comment)
                    if scalar == "string":
                        prop.string_enum_values = _string_enum_values(prop_schema)
                    type_model.add_property(prop)
                elif type_is(prop_schema, "object"):
                    anonymous = self.type_name_for_stub(name)
                    self._request_object_type(anonymous, name, prop_schema)
                    type_model.add_property(
                        TypeProperty(name=name, type=anonymous, comment=comment)
                    )
                elif type_is(prop_schema, "array"):
                    item_type = self._array_item_type_for_schema(name, prop_schema)
                    prop = TypeProperty(name=name, type=item_type, repeated=True, comment=comment)
                    if item_type == "string" and prop_schema.items is not None:
                        item_schema = prop_schema.items.schema
                        if item_schema is not None:
                            prop.string_enum_values = _string_enum_values(item_schema)
                    type_model.add_property(prop)
                else:
                    log.warning(
                        "ignoring %s, which has an unsupported property type '%s'",
                        name,
                        prop_schema.type.description(),
                    )
            elif is_empty(prop_schema):
                type_model.add_property(TypeProperty(name=name, type="Any"))
            elif prop_schema.one_of is not None or prop_schema.any_of is not None:
                anonymous = self.type_name_for_stub(name + "Item")
                self._request_object_type(anonymous, name, prop_schema)
                type_model.add_property(TypeProperty(name=name, type=anonymous))
            else:
                log.warning(
                    "ignoring %s.%s, which has an unrecognized schema:\n%s",
                    type_model.name,
                    name,
                    describe(prop_schema),
                )

    @staticmethod
    def _build_type_requirements(type_model: TypeModel, schema: Schema) -> None:
        if schema.required is not None:
            type_model.required = schema.required

    def _build_pattern_property_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.pattern_properties is None:
            return
        type_model.open_patterns = []
        for pair in schema.pattern_properties:
            pattern, prop_schema = pair.name, pair.value
            type_model.open_patterns.append(pattern)
            if prop_schema.ref is None:
                log.warning("unhandled pattern property %s", pattern)
                continue
            type_name = self._type_name_for_reference(prop_schema.ref)
            type_name = self.type_name_overrides.get(type_name, type_name)
            property_name = self._type_name_for_reference(prop_schema.ref)
            property_name = self.property_name_overrides.get(property_name, property_name)
            self._add_map_property(
                type_model, property_name, f"Named{type_name}", type_name, pattern=pattern
            )

    def _build_additional_property_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        additional = schema.additional_properties
        if additional is None:
            return
        name = "additionalProperties"
        if additional.boolean is not None:
            if additional.boolean:
                type_model.open = True
                self._add_map_property(type_model, name, "NamedAny", "Any")
            return
        inner = additional.schema
        if inner is None:
            return
        type_model.open = True
        if inner.ref is not None:
            map_type = self._type_name_for_reference(inner.ref)
            self._add_map_property(type_model, name, f"Named{map_type}", map_type)
        elif inner.type is not None:
            type_name = inner.type.string
            if type_name == "string":
                self._add_map_property(type_model, name, "NamedString", "string")
            elif type_name == "array" and inner.items is not None:
                item_schema = inner.items.schema
                item_type = (
                    item_schema.type.string
                    if item_schema is not None and item_schema.type is not None
                    else None
                )
                if item_type == "string":
                    self._add_map_property(type_model, name, "NamedStringArray", "StringArray")
        elif inner.one_of is not None:
            property_type = self.type_name_for_stub(type_model.name + "Item")
            self._add_map_property(type_model, name, f"Named{property_type}", property_type)
            self._request_object_type(property_type, name, inner)

    def _build_one_of_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.one_of is None:
            return
        type_model.open = True
        type_model.one_of_wrapper = True
        for one_of in schema.one_of:
            if one_of.ref is not None:
                property_name = self._property_name_for_reference(one_of.ref)
                if property_name is not None:
                    type_model.add_property(
                        TypeProperty(
                            name=property_name,
                            type=self._type_name_for_reference(one_of.ref),
                        )
                    )
            elif one_of.type is not None and one_of.type.string in _SCALAR_TYPES:
                kind = one_of.type.string
                type_model.add_property(TypeProperty(name=kind, type=_SCALAR_TYPES[kind]))
            else:
                log.warning("Unsupported oneOf:\n%s", describe(one_of))

    def _add_anonymous_accessor_for_schema(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.ref is not None:
            property_name = self._property_name_for_reference(schema.ref)
            if property_name is not None:
                type_model.add_property(
                    TypeProperty(
                        name=property_name,
                        type=self._type_name_for_reference(schema.ref),
                        repeated=True,
                    )
                )
                type_model.is_item_array = True
        else:
            type_model.add_property(TypeProperty(name="value", type="string", repeated=True))
            type_model.is_string_array = True

    def _build_any_of_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        any_ofs = schema.any_of
        if any_ofs is None:
            return
        if len(any_ofs) != 2:
            log.warning("Unhandled anyOfs:\n%s", describe(schema))
            return
        first, second = any_ofs
        if _schema_is_contained_in_array(first, second):
            self._add_anonymous_accessor_for_schema(type_model, first)
        elif _schema_is_contained_in_array(second, first):
            self._add_anonymous_accessor_for_schema(type_model, second)
        else:
            for any_of in any_ofs:
                if any_of.ref is not None:
                    property_name = self._property_name_for_reference(any_of.ref)
                    if property_name is not None:
                        type_model.add_property(
                            TypeProperty(
                                name=property_name,
                                type=self._type_name_for_reference(any_of.ref),
                            )
                        )
                else:
                    type_model.add_property(TypeProperty(name="boolean", type="bool"))

    def _build_default_accessors(self, type_model: TypeModel) -> None:
        type_model.open = True
        self._add_map_property(
            type_model, "additionalProperties", "NamedAny", "Any", implicit=False
        )

    def _build_members(self, type_model: TypeModel, schema: Schema) -> None:
        self._build_type_properties(type_model, schema)
        self._build_type_requirements(type_model, schema)
        self._build_pattern_property_accessors(type_model, schema)
        self._build_additional_property_accessors(type_model, schema)
        self._build_one_of_accessors(type_model, schema)
        self._build_any_of_accessors(type_model, schema)

    def build_type_for_definition(
        self, type_name: str, property_name: str, schema: Schema
    ) -> Optional[TypeModel]:
        """Build a type model for an object definition; None for other types."""
        if schema.type is None or schema.type.string == "object":
            return self._build_object_type(type_name, property_name, schema)
        return None

    def _build_object_type(self, type_name: str, property_name: str, schema: Schema) -> TypeModel:
        type_model = TypeModel(name=type_name)
        if is_empty(schema):
            self._build_default_accessors(type_model)
        else:
            if schema.description is not None:
                type_model.comment = schema.description
            self._build_members(type_model, schema)
        return type_model

    def build(self) -> None:
        """Build the type models of the domain.

        Raises ValueError when the schema has no definitions section.
        """
        if self.schema is None or self.schema.definitions is None:
            raise ValueError("missing definitions section")

        document_name = self.prefix + "Document"
        document = TypeModel(name=document_name)
        self._build_members(document, self.schema)
        if document.properties:
            self.type_models[document_name] = document

        for pair in self.schema.definitions:
            type_name = self.type_name_for_stub(pair.name)
            type_model = self.build_type_for_definition(type_name, pair.name, pair.value)
            if type_model is not None:
                if pair.name in ("reference", "jsonReference"):
                    type_model.open = True
                self.type_models[type_name] = type_model

        # Building requested types may request further types.
        while self.object_type_requests:
            requests = self.object_type_requests
            self.object_type_requests = {}
            for type_name, request in requests.items():
                self.type_models[request.name] = self._build_object_type(
                    type_name, request.property_name, request.schema
                )

        for map_type_name in sorted(self.map_type_requests):
            type_name = "Named" + title(map_type_name)
            pair_model = TypeModel(
                name=type_name,
                comment=(
                    f"Automatically-generated message used to represent maps of "
                    f"{map_type_name} as ordered (name,value) pairs."
                ),
                is_pair=True,
                pair_value_type=map_type_name,
            )
            pair_model.add_property(TypeProperty(name="name", type="string", comment="Map key"))
            pair_model.add_property(
                TypeProperty(name="value", type=map_type_name, comment="Mapped value")
            )
            self.type_models[type_name] = pair_model

        string_array = TypeModel(name="StringArray")
        string_array.add_property(TypeProperty(name="value", type="string", repeated=True))
        self.type_models[string_array.name] = string_array

        any_type = TypeModel(name="Any", open=True, is_blob=True)
        any_type.add_property(TypeProperty(name="value", type="google.protobuf.Any"))
        any_type.add_property(TypeProperty(name="yaml", type="string"))
        self.type_models[any_type.name] = any_type

    def sorted_type_names(self) -> list[str]:
        """Return the names of all type models in sorted order."""
        return sorted(self.type_models)

    def description(self) -> str:
        """Return a text description of every type model, sorted by name."""
        return "".join(
            self.type_models[name].description() for name in self.sorted_type_names()
        )
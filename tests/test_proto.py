from gnostic.generator.domain import Domain
from gnostic.generator.proto import ProtoOption, generate_proto
from gnostic.generator.types import TypeModel, TypeProperty


def _domain(*models):
    domain = Domain(None)
    for model in models:
        domain.type_models[model.name] = model
    return domain


def _model(name, *props):
    model = TypeModel(name=name)
    for prop in props:
        model.add_property(prop)
    return model


def test_preamble_layout():
    text = generate_proto(_domain(), "pkg", "// header", [], None)
    assert text.startswith(
        '// header\n// THIS FILE IS AUTOMATICALLY GENERATED.\n\nsyntax = "proto3";\n\npackage pkg;\n'
    )


def test_imports_are_declared():
    text = generate_proto(_domain(), "pkg", "", [], ["google/protobuf/any.proto"])
    assert 'import "google/protobuf/any.proto";' in text.splitlines()


def test_option_values_and_comments():
    options = [
        ProtoOption(name="java_multiple_files", value="true", comment="// first\n// second"),
        ProtoOption(name="java_package", value="org.pkg", comment="// package"),
    ]
    lines = generate_proto(_domain(), "pkg", "", options, None).splitlines()
    assert "option java_multiple_files = true;" in lines
    assert 'option java_package = "org.pkg";' in lines
    first = lines.index("// first")
    assert lines[first + 1] == "// second"
    assert lines[first + 2] == "option java_multiple_files = true;"
    assert lines[first + 3] == ""


def test_messages_are_sorted_by_name():
    domain = _domain(
        _model("Beta", TypeProperty(name="x", type="string")),
        _model("Alpha", TypeProperty(name="y", type="string")),
    )
    text = generate_proto(domain, "pkg", "", [], None)
    assert text.index("message Alpha {") < text.index("message Beta {")


def test_field_types_names_and_numbers():
    domain = _domain(
        _model(
            "Item",
            TypeProperty(name="$ref", type="string"),
            TypeProperty(name="maxLength", type="int"),
            TypeProperty(name="values", type="float", repeated=True),
        )
    )
    lines = generate_proto(domain, "pkg", "", [], None).splitlines()
    start = lines.index("message Item {")
    assert lines[start + 1 : start + 5] == [
        "  string _ref = 1;",
        "  int64 max_length = 2;",
        "  repeated double values = 3;",
        "}",
    ]


def test_oneof_wrapper_nests_fields():
    model = _model(
        "Choice",
        TypeProperty(name="string", type="string"),
        TypeProperty(name="boolean", type="bool"),
    )
    model.one_of_wrapper = True
    lines = generate_proto(_domain(model), "pkg", "", [], None).splitlines()
    start = lines.index("message Choice {")
    assert lines[start + 1] == "  oneof oneof {"
    assert lines[start + 2].startswith("    string string = 1")
    assert lines[start + 3].startswith("    bool boolean = 2")
    assert lines[start + 4] == "  }"
    assert lines[start + 5] == "}"


def test_comments_precede_message_and_field():
    model = _model("Note", TypeProperty(name="text", type="string", comment="Body text"))
    model.comment = "A note"
    lines = generate_proto(_domain(model), "pkg", "", [], None).splitlines()
    start = lines.index("message Note {")
    assert lines[start - 1] == "// A note"
    assert lines[start + 1] == "  // Body text"
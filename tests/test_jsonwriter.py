import pytest
import yaml

from gnostic.jsonwriter import escape, marshal

STR = "tag:yaml.org,2002:str"
INT = "tag:yaml.org,2002:int"
FLOAT = "tag:yaml.org,2002:float"
BOOL = "tag:yaml.org,2002:bool"
SEQ = "tag:yaml.org,2002:seq"
MAP = "tag:yaml.org,2002:map"


def scalar(tag, value):
    return yaml.ScalarNode(tag, value)


def string_array(values):
    return yaml.SequenceNode(SEQ, [scalar(STR, v) for v in values])


def sequence(items):
    return yaml.SequenceNode(SEQ, list(items))


def mapping(pairs):
    return yaml.MappingNode(MAP, [(scalar(STR, k), v) for k, v in pairs])


@pytest.mark.parametrize(
    "node, expected",
    [
        (scalar(STR, "expected"), '"expected"\n'),
        (scalar(BOOL, "true"), "true\n"),
        (scalar(FLOAT, "42.1"), "42.1\n"),
        (scalar(INT, "42"), "42\n"),
        (string_array(["a", "b", "c"]), '[\n  "a",\n  "b",\n  "c"\n]\n'),
        (
            sequence(scalar(BOOL, v) for v in ["true", "false", "true"]),
            "[\n  true,\n  false,\n  true\n]\n",
        ),
        (
            sequence(scalar(FLOAT, v) for v in ["1.1", "2.2", "3.3"]),
            "[\n  1.1,\n  2.2,\n  3.3\n]\n",
        ),
        (
            sequence(scalar(INT, v) for v in ["1", "2", "3"]),
            "[\n  1,\n  2,\n  3\n]\n",
        ),
        (
            sequence([string_array(["a", "b", "c"]), string_array(["e", "f"])]),
            '[\n  [\n    "a",\n    "b",\n    "c"\n  ],\n  [\n    "e",\n    "f"\n  ]\n]\n',
        ),
        (
            sequence([mapping([("required", string_array(["a", "b", "c"]))])]),
            '[\n  {\n    "required": [\n      "a",\n      "b",\n      "c"\n    ]\n  }\n]\n',
        ),
        (
            mapping([("required", string_array(["a", "b", "c"]))]),
            '{\n  "required": [\n    "a",\n    "b",\n    "c"\n  ]\n}\n',
        ),
    ],
)
def test_marshal(node, expected):
    assert marshal(node) == expected


def test_marshal_composed_document():
    node = yaml.compose("version: 1.0.0\n")
    assert marshal(node) == '{\n  "version": "1.0.0"\n}\n'


def test_marshal_unsupported_node_raises():
    with pytest.raises(ValueError):
        marshal(yaml.nodes.Node(None, None, None, None))


def test_marshal_non_node_raises():
    with pytest.raises(ValueError):
        marshal(42)


def test_marshal_short_tags_accepted():
    assert marshal(scalar("!!str", "x")) == '"x"\n'


def test_marshal_escapes_strings():
    assert marshal(scalar(STR, 'a"b')) == '"a\\"b"\n'


def test_escape():
    assert escape('a\n"b') == 'a\\n\\"b'
"""Render YAML node trees as indented JSON text."""

from __future__ import annotations

import yaml

INDENTATION = "  "

_TAG_PREFIX = "tag:yaml.org,2002:"


def _tag_name(tag: str | None) -> str:
    """Return the short name of a core YAML tag ("str", "int", ...)."""
    if not tag:
        return ""
    if tag.startswith(_TAG_PREFIX):
        return tag[len(_TAG_PREFIX):]
    if tag.startswith("!!"):
        return tag[2:]
    return tag


def escape(text: str) -> str:
    """Apply basic JSON escaping to newlines and double quotes."""
    return text.replace("\n", "\\n").replace('"', '\\"')


def _write_value(out: list[str], node: yaml.Node, indent: str) -> None:
    if isinstance(node, yaml.MappingNode):
        _write_map(out, node, indent)
    elif isinstance(node, yaml.SequenceNode):
        _write_sequence(out, node, indent)
    elif isinstance(node, yaml.ScalarNode):
        _write_scalar(out, node)


def _write_map(out: list[str], node: yaml.Node, indent: str) -> None:
    if not isinstance(node, yaml.MappingNode):
        out.append(f"invalid node for map: {node!r}")
        return
    out.append("{\n")
    inner = indent + INDENTATION
    pairs = node.value
    for position, (key_node, value_node) in enumerate(pairs):
        key = key_node.value if isinstance(key_node, yaml.ScalarNode) else ""
        out.append(f'{inner}"{key}": ')
        _write_value(out, value_node, inner)
        if position < len(pairs) - 1:
            out.append(",")
        out.append("\n")
    out.append(indent)
    out.append("}")


def _write_scalar(out: list[str], node: yaml.Node) -> None:
    if not isinstance(node, yaml.ScalarNode):
        out.append(f"invalid node for scalar: {node!r}")
        return
    tag = _tag_name(node.tag)
    if tag == "str":
        out.append('"' + escape(node.value) + '"')
    elif tag in ("int", "float", "bool"):
        out.append(node.value)


def _write_sequence(out: list[str], node: yaml.Node, indent: str) -> None:
    if not isinstance(node, yaml.SequenceNode):
        out.append(f"invalid node for sequence: {node!r}")
        return
    out.append("[\n")
    inner = indent + INDENTATION
    items = node.value
    for position, item in enumerate(items):
        out.append(inner)
        _write_value(out, item, inner)
        if position < len(items) - 1:
            out.append(",")
        out.append("\n")
    out.append(indent)
    out.append("]")


def marshal(node: yaml.Node) -> str:
    """Write a YAML node as JSON text followed by a newline.

    Raises ValueError for anything other than a mapping, sequence or scalar node.
    """
    out: list[str] = []
    if isinstance(node, yaml.MappingNode):
        _write_map(out, node, "")
    elif isinstance(node, yaml.SequenceNode):
        _write_sequence(out, node, "")
    elif isinstance(node, yaml.ScalarNode):
        _write_scalar(out, node)
    else:
        raise ValueError("invalid node passed to marshal")
    out.append("\n")
    return "".join(out)
"""Command that generates Protocol Buffer models from OpenAPI JSON Schemas."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from gnostic.generator.domain import Domain
from gnostic.generator.proto import ProtoOption, generate_proto
from gnostic.jsonschema.operations import resolve_all_ofs, resolve_refs
from gnostic.jsonschema.reader import new_base_schema, schema_from_file

log = logging.getLogger(__name__)

HEADER = ""

_VERSIONS = {
    "v2": ("openapi-2.0.json", "OpenAPIv2", "openapi.v2", "openapiv2"),
    "v3": ("openapi-3.1.json", "OpenAPIv3", "openapi.v3", "openapiv3"),
    "discovery": ("discovery.json", "discovery", "discovery.v1", "discovery"),
}

_TYPE_NAME_OVERRIDES = {
    "v2": {"VendorExtension": "Any"},
    "v3": {"SpecificationExtension": "Any"},
    "discovery": {},
}

_PROPERTY_NAME_OVERRIDES = {
    "v2": {"PathItem": "Path", "ResponseValue": "ResponseCode"},
    "v3": {"PathItem": "Path", "ResponseValue": "ResponseCode"},
    "discovery": {},
}


def proto_options(directory_name: str, package_name: str) -> list[ProtoOption]:
    """Return the options declared in generated OpenAPI .proto files."""
    return [
        ProtoOption(
            name="java_multiple_files",
            value="true",
            comment=(
                "// This option lets the proto compiler generate Java code inside the package\n"
                "// name (see below) instead of inside an outer class. It creates a simpler\n"
                "// developer experience by reducing one-level of name nesting and be\n"
                "// consistent with most programming languages that don't support outer classes."
            ),
        ),
        ProtoOption(
            name="java_outer_classname",
            value="OpenAPIProto",
            comment=(
                "// The Java outer classname should be the filename in UpperCamelCase. This\n"
                "// class is only used to hold proto descriptor, so developers don't need to\n"
                "// work with it directly."
            ),
        ),
        ProtoOption(
            name="java_package",
            value="org." + package_name,
            comment="// The Java package name must be proto package name with proper prefix.",
        ),
        ProtoOption(
            name="objc_class_prefix",
            value="OAS",
            comment=(
                "// A reasonable prefix for the Objective-C symbols generated from the package.\n"
                "// It should at a minimum be 3 characters long, all uppercase, and convention\n"
                "// is to use an abbreviation of the package name. Something short, but\n"
                "// hopefully unique enough to not conflict with things that may come along in\n"
                "// the future. 'GPB' is reserved for the protocol buffer implementation itself."
            ),
        ),
        ProtoOption(
            name="go_package",
            value="./" + directory_name + ";" + package_name,
            comment="// The Go package name.",
        ),
    ]


def generate_openapi_model(version: str, project_root: Union[str, Path] = ".") -> Path:
    """Generate the .proto model for an OpenAPI version and return its path.

    Raises ValueError for an unknown version or a schema without definitions.
    """
    if version not in _VERSIONS:
        raise ValueError(f"Unknown OpenAPI version {version}")
    input_name, file_name, proto_package_name, directory_name = _VERSIONS[version]
    go_package_name = proto_package_name.replace(".", "_")
    root = Path(project_root)

    base_schema = new_base_schema()
    if base_schema is not None:
        resolve_refs(base_schema)
        resolve_all_ofs(base_schema)

    openapi_schema = schema_from_file(root / directory_name / input_name)
    if openapi_schema is not None:
        resolve_refs(openapi_schema)
        resolve_all_ofs(openapi_schema)

    domain = Domain(openapi_schema, version)
    domain.type_name_overrides = dict(_TYPE_NAME_OVERRIDES[version])
    domain.property_name_overrides = dict(_PROPERTY_NAME_OVERRIDES[version])
    domain.build()
    log.info("Type Model:\n%s", domain.description())

    out_dir = root / directory_name
    out_dir.mkdir(parents=True, exist_ok=True)

    log.info("Generating protocol buffer description")
    proto = generate_proto(
        domain,
        proto_package_name,
        HEADER,
        proto_options(directory_name, go_package_name),
        ["google/protobuf/any.proto"],
    )
    proto_path = out_dir / (file_name + ".proto")
    proto_path.write_text(proto, encoding="utf-8")
    return proto_path


def usage(program: str = "generate-gnostic") -> str:
    """Return the usage text for the command."""
    return f"""
Usage: {program} [OPTIONS]
Options:
  --v2
    Generate Protocol Buffer representation for OpenAPI v2.
    Files are read from and written to appropriate locations in the
    project directory.
  --v3
    Generate Protocol Buffer representation for OpenAPI v3.
    Files are read from and written to appropriate locations in the
    project directory.
  --discovery
    Generate Protocol Buffer representation for the Discovery format.
"""


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; returns the process exit status."""
    program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "generate-gnostic"
    args = list(sys.argv[1:] if argv is None else argv)
    flags = {"--v2": "v2", "--v3": "v3", "--discovery": "discovery"}
    version = ""
    for arg in args:
        if arg not in flags:
            print(f"Unknown option: {arg}.\n{usage(program)}")
            return 1
        version = flags[arg]
    if not version:
        print(usage(program))
        return 0
    try:
        generate_openapi_model(version, "./")
    except (OSError, ValueError) as error:
        print(error)
    return 0


if __name__ == "__main__":
    sys.exit(main())
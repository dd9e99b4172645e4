# gnostic

Tools for reading JSON Schemas that describe REST API formats (such as the
OpenAPI specification) and turning them into Protocol Buffer models.

The package has three parts:

- `gnostic.jsonschema` reads JSON Schemas (written as JSON or YAML) into
  `Schema` objects, resolves `$ref` and `allOf` elements, describes schemas as
  text and writes them back out as JSON.
- `gnostic.generator` builds a simplified type model from a schema and
  generates a `.proto` description from it.
- `gnostic.jsonwriter` writes YAML node trees (as composed by PyYAML) as JSON.

## Command line

The `gnostic-generate` command builds the type model for one of the supported
formats and writes its Protocol Buffer description into the matching
directory under the current directory:

```
gnostic-generate --v2          # reads openapiv2/openapi-2.0.json, writes openapiv2/OpenAPIv2.proto
gnostic-generate --v3          # reads openapiv3/openapi-3.1.json, writes openapiv3/OpenAPIv3.proto
gnostic-generate --discovery   # reads discovery/discovery.json, writes discovery/discovery.proto
```

Run it with no options to print the usage text. An unknown option prints a
message and the usage text and exits with status 1. If the input file cannot
be read or the schema has no `definitions` section, the error is printed.
The type model that was built is logged at INFO level through the standard
`logging` module before the file is written.

## Library use

Reading a schema and resolving its references:

```python
from gnostic.jsonschema.reader import schema_from_file
from gnostic.jsonschema.operations import resolve_refs, resolve_all_ofs
from gnostic.jsonschema.display import describe

schema = schema_from_file("openapiv2/openapi-2.0.json")
resolve_refs(schema)
resolve_all_ofs(schema)
print(describe(schema))
```

`schema_from_text` parses a string instead of a file, and `new_base_schema`
returns the draft-04 meta-schema. Every schema read that carries an `id` is
recorded in `gnostic.jsonschema.reader.SCHEMAS`; `resolve_json_pointer` looks
references up there, and raises `ValueError` for a pointer it cannot resolve.
`gnostic.jsonschema.operations` also offers `is_empty`, `is_equal`, `type_is`,
`copy_properties`, `apply_to_schemas` and `resolve_any_ofs`.

Building a type model and a `.proto` file from it:

```python
from gnostic.generator.domain import Domain
from gnostic.generator.proto import generate_proto

domain = Domain(schema, "v2")
domain.build()            # raises ValueError if there is no definitions section
print(domain.description())

proto_text = generate_proto(domain, "openapi.v2", "", [], ["google/protobuf/any.proto"])
```

`gnostic.generator.cli.proto_options` gives the standard set of file options
(`java_package`, `go_package` and so on) as `ProtoOption` values for a given
directory and package name, and `generate_openapi_model(version, project_root)`
runs the whole process for one version and returns the path of the written
`.proto` file.

Writing a schema back out as JSON (default values are left out):

```python
from gnostic.jsonschema.writer import json_string

print(json_string(schema))
```

Writing any YAML node tree as JSON:

```python
import yaml
from gnostic.jsonwriter import marshal

print(marshal(yaml.compose("required: [a, b]")), end="")
```

`marshal` raises `ValueError` for a node that is not a mapping, sequence or
scalar node.

## What it does not do

- It generates only the `.proto` description of a type model. It does not
  generate code that parses API documents into those models, nor handlers for
  specification extensions.
- It does not read or validate OpenAPI documents themselves; it works on the
  JSON Schemas that describe the formats.
- `$ref` resolution is limited to whole documents and `#/definitions/<name>`
  or `#/properties/<name>` pointers into schemas that have already been read.
"""OpenAPI writer.

Renders the endpoint catalog as an OpenAPI 3.0 YAML document.
"""

import re

import yaml

from restdoc.model.base import ClassDescriptor, Endpoint
from restdoc.writer.options import RenderOptions

OPENAPI_VERSION = "3.0.3"
DEFAULT_MEDIA_TYPE = "application/json"

_SCALARS = {
    "int": ("integer", "int32"),
    "java.lang.Integer": ("integer", "int32"),
    "short": ("integer", "int32"),
    "java.lang.Short": ("integer", "int32"),
    "byte": ("integer", "int32"),
    "java.lang.Byte": ("integer", "int32"),
    "long": ("integer", "int64"),
    "java.lang.Long": ("integer", "int64"),
    "java.math.BigInteger": ("integer", None),
    "float": ("number", "float"),
    "java.lang.Float": ("number", "float"),
    "double": ("number", "double"),
    "java.lang.Double": ("number", "double"),
    "java.math.BigDecimal": ("number", None),
    "boolean": ("boolean", None),
    "java.lang.Boolean": ("boolean", None),
    "char": ("string", None),
    "java.lang.Character": ("string", None),
    "java.lang.String": ("string", None),
    "java.util.UUID": ("string", "uuid"),
    "java.util.Date": ("string", "date-time"),
    "java.time.Instant": ("string", "date-time"),
    "java.time.OffsetDateTime": ("string", "date-time"),
    "java.time.LocalDate": ("string", "date"),
}

_COLLECTIONS = ("java.util.List", "java.util.Set", "java.util.Collection", "java.lang.Iterable")
_GENERIC = re.compile(r"^([\w.$]+)<(.*)>$")


def render_openapi(descriptors: list[ClassDescriptor], options: RenderOptions) -> str:
    """Render the catalog as an OpenAPI YAML string."""
    return yaml.safe_dump(build_openapi(descriptors, options), sort_keys=False, allow_unicode=True)


def build_openapi(descriptors: list[ClassDescriptor], options: RenderOptions) -> dict:
    tags = []
    paths: dict[str, dict] = {}

    for descriptor in descriptors:
        tag = {"name": descriptor.name}
        if descriptor.description:
            tag["description"] = descriptor.description
        tags.append(tag)

        for endpoint in descriptor.endpoints:
            operations = paths.setdefault(endpoint.path, {})
            # first declaration of a (path, verb) pair wins
            operations.setdefault(endpoint.http_method.lower(), _operation(endpoint, descriptor.name))

    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": options.title, "version": options.api_version},
        "servers": [{"url": options.base_path}],
        "tags": tags,
        "paths": paths,
    }


def json_schema(type_ref: str) -> dict:
    """Map a Java type reference to a JSON schema fragment."""
    type_ref = type_ref.strip()
    if type_ref.endswith("[]"):
        return {"type": "array", "items": json_schema(type_ref[:-2])}

    if type_ref in _SCALARS:
        schema_type, schema_format = _SCALARS[type_ref]
        schema = {"type": schema_type}
        if schema_format:
            schema["format"] = schema_format
        return schema

    match = _GENERIC.match(type_ref)
    raw = match.group(1) if match else type_ref
    if raw in _COLLECTIONS or (raw.startswith("java.util.") and raw.endswith(("List", "Set"))):
        item = match.group(2) if match else "java.lang.Object"
        return {"type": "array", "items": json_schema(item)}
    if raw.startswith("java.util.") and raw.endswith("Map"):
        return {"type": "object"}

    return {"type": "object", "title": raw.rsplit(".", 1)[-1]}


def _operation(endpoint: Endpoint, tag: str) -> dict:
    operation: dict = {"tags": [tag]}
    if endpoint.summary:
        operation["summary"] = endpoint.summary
    if endpoint.description:
        operation["description"] = endpoint.description

    parameters = [
        {
            "name": pv.name,
            "in": "path",
            "required": True,
            "description": pv.description,
            "schema": json_schema(pv.type),
        }
        for pv in endpoint.path_vars
    ]
    parameters.extend(
        {
            "name": qp.name,
            "in": "query",
            "required": qp.required,
            "description": qp.description,
            "schema": json_schema(qp.type),
        }
        for qp in endpoint.query_params
    )
    if parameters:
        operation["parameters"] = parameters

    if endpoint.request_body is not None:
        body = endpoint.request_body
        operation["requestBody"] = {
            "description": body.description,
            "required": True,
            "content": {ct: {"schema": json_schema(body.type)} for ct in endpoint.consumes or (DEFAULT_MEDIA_TYPE,)},
        }

    operation["responses"] = {"200": _response(endpoint)}
    return operation


def _response(endpoint: Endpoint) -> dict:
    if endpoint.return_type in ("void", "java.lang.Void"):
        return {"description": "OK"}
    return {
        "description": "OK",
        "content": {ct: {"schema": json_schema(endpoint.return_type)} for ct in endpoint.produces or (DEFAULT_MEDIA_TYPE,)},
    }

"""Unified data models for resolved REST endpoints.

Every dialect collector converts its annotations into these standard
models, which are then handed to the output writers.
"""

from pydantic import BaseModel, ConfigDict, field_validator

TypeRef = str  # fully-qualified name of the declared type


def _unique(values) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


class PathVar(BaseModel):
    """A path template variable bound to a method parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    type: TypeRef


class QueryParam(BaseModel):
    """A query string parameter bound to a method parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool
    description: str = ""
    type: TypeRef


class RequestBody(BaseModel):
    """The parameter deserialized from the request payload."""

    model_config = ConfigDict(frozen=True)

    parameter_name: str
    description: str = ""
    type: TypeRef


class EndpointMapping(BaseModel):
    """Routing facts found on a single class or method, before merging."""

    model_config = ConfigDict(frozen=True)

    paths: tuple[str, ...] = ()
    http_methods: tuple[str, ...] = ()
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()

    @field_validator("paths", "http_methods", "consumes", "produces", mode="before")
    @classmethod
    def _collapse_duplicates(cls, v):
        if isinstance(v, str):
            return (v,)
        return _unique(v)

    @classmethod
    def of(cls, paths=(), http_methods=(), consumes=(), produces=()) -> "EndpointMapping":
        return cls(paths=paths, http_methods=http_methods, consumes=consumes, produces=produces)


class Endpoint(BaseModel):
    """A single resolved (path, HTTP method) combination."""

    model_config = ConfigDict(frozen=True)

    path: str  # /api/users/{id}
    http_method: str  # GET / POST / PUT / DELETE / HEAD
    query_params: tuple[QueryParam, ...] = ()
    path_vars: tuple[PathVar, ...] = ()
    request_body: RequestBody | None = None
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    summary: str = ""
    description: str = ""
    return_type: TypeRef = "void"


class ClassDescriptor(BaseModel):
    """One routable class and all the endpoints it exposes."""

    model_config = ConfigDict(frozen=True)

    name: str
    context_path: str = ""
    endpoints: tuple[Endpoint, ...]
    description: str = ""

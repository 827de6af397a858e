"""Endpoint resolution engine shared by all routing dialects.

A dialect only knows how to read its own annotations: whether a class or
method is routable, what mapping it declares and how its parameters are
bound. The resolver merges class and method mappings, walks the superclass
chain, applies the documentation override tags and expands every method
into one endpoint per (HTTP method, path) pair.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from restdoc.collector.docs import CONTEXT_TAG, IGNORE_TAG, NAME_TAG, first_tag_value, has_tag
from restdoc.config import get_logger
from restdoc.errors import InheritanceCycleError, ResolutionError
from restdoc.model.base import (
    ClassDescriptor,
    Endpoint,
    EndpointMapping,
    PathVar,
    QueryParam,
    RequestBody,
)
from restdoc.model.code import ClassDecl, CodeModel, MethodDecl

logger = get_logger(__name__)


class Dialect(Protocol):
    """Contract for the annotation grammars the resolver understands."""

    name: str
    # False when only method-level annotations may declare HTTP methods
    inherits_class_http_methods: bool

    def class_qualifies(self, cls: ClassDecl) -> bool:
        ...

    def method_qualifies(self, method: MethodDecl) -> bool:
        ...

    def extract_mapping(self, decl: ClassDecl | MethodDecl) -> EndpointMapping:
        ...

    def extract_path_vars(self, method: MethodDecl) -> list[PathVar]:
        ...

    def extract_query_params(self, method: MethodDecl) -> list[QueryParam]:
        ...

    def extract_request_body(self, method: MethodDecl) -> RequestBody | None:
        ...

    def default_http_methods(self) -> tuple[str, ...]:
        ...


def normalize_path(path: str) -> str:
    """Ensure exactly one leading slash and collapse repeated slashes."""
    return re.sub(r"/{2,}", "/", "/" + path.strip())


def join_paths(*segments: str) -> str:
    return normalize_path("/".join(s for s in segments if s))


def resolve_paths(
    context_path: str, class_mapping: EndpointMapping, method_mapping: EndpointMapping
) -> tuple[str, ...]:
    """Cross product of context path x class paths x method paths."""
    class_paths = class_mapping.paths
    method_paths = method_mapping.paths

    if not class_paths and not method_paths:
        paths = [join_paths(context_path)]
    elif not class_paths:
        paths = [join_paths(context_path, p) for p in method_paths]
    elif not method_paths:
        paths = [join_paths(context_path, p) for p in class_paths]
    else:
        paths = [join_paths(context_path, c, m) for c in class_paths for m in method_paths]
    return tuple(dict.fromkeys(paths))


def first_non_empty(*candidates: tuple[str, ...]) -> tuple[str, ...]:
    for candidate in candidates:
        if candidate:
            return candidate
    return ()


class EndpointResolver:
    """Resolves the endpoints of a code model under a single dialect."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.log = logger.bind(dialect=dialect.name)

    def resolve(self, code_model: CodeModel, *, workers: int = 1, strict: bool = False) -> list[ClassDescriptor]:
        """Return a descriptor for every class that exposes at least one endpoint."""

        def resolve_class(cls: ClassDecl) -> ClassDescriptor | None:
            try:
                return self.class_descriptor(code_model, cls)
            except ResolutionError as e:
                if strict:
                    raise
                self.log.error("failed to resolve class", cls=cls.qualified_name, error=str(e))
                return None

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(resolve_class, code_model.classes))
        else:
            results = [resolve_class(cls) for cls in code_model.classes]

        descriptors = [d for d in results if d is not None]
        self.log.info("resolved classes", classes=len(descriptors))
        return descriptors

    def class_descriptor(self, code_model: CodeModel, cls: ClassDecl) -> ClassDescriptor | None:
        if has_tag(cls.doc, IGNORE_TAG):
            self.log.debug("class ignored by tag", cls=cls.qualified_name)
            return None
        if not self.dialect.class_qualifies(cls):
            return None

        context_path = first_tag_value(cls.doc, CONTEXT_TAG) or ""
        class_mapping = self.dialect.extract_mapping(cls)
        endpoints = self.collect_endpoints(code_model, cls, context_path, class_mapping)
        if not endpoints:
            self.log.debug("class has no endpoints", cls=cls.qualified_name)
            return None

        return ClassDescriptor(
            name=first_tag_value(cls.doc, NAME_TAG) or cls.qualified_name,
            context_path=context_path,
            endpoints=tuple(dict.fromkeys(endpoints)),
            description=cls.doc.body,
        )

    def collect_endpoints(
        self,
        code_model: CodeModel,
        cls: ClassDecl,
        context_path: str,
        class_mapping: EndpointMapping,
    ) -> list[Endpoint]:
        """Endpoints of cls and of every declared class up its superclass chain."""
        endpoints: list[Endpoint] = []
        visited: list[str] = []
        current: ClassDecl | None = cls

        while current is not None:
            if current.qualified_name in visited:
                raise InheritanceCycleError(visited + [current.qualified_name])
            visited.append(current.qualified_name)

            for method in current.methods:
                endpoints.extend(self.method_endpoints(context_path, class_mapping, method))
            current = code_model.superclass_of(current)

        return endpoints

    def method_endpoints(
        self, context_path: str, class_mapping: EndpointMapping, method: MethodDecl
    ) -> list[Endpoint]:
        if has_tag(method.doc, IGNORE_TAG) or not self.dialect.method_qualifies(method):
            return []

        method_mapping = self.dialect.extract_mapping(method)

        paths = resolve_paths(context_path, class_mapping, method_mapping)
        http_methods = self.resolve_http_methods(class_mapping, method_mapping)
        consumes = first_non_empty(method_mapping.consumes, class_mapping.consumes)
        produces = first_non_empty(method_mapping.produces, class_mapping.produces)
        path_vars = tuple(self.dialect.extract_path_vars(method))
        query_params = tuple(self.dialect.extract_query_params(method))
        request_body = self.dialect.extract_request_body(method)

        return [
            Endpoint(
                path=path,
                http_method=http_method,
                query_params=query_params,
                path_vars=path_vars,
                request_body=request_body,
                consumes=consumes,
                produces=produces,
                summary=method.doc.summary,
                description=method.doc.body,
                return_type=method.return_type,
            )
            for http_method in http_methods
            for path in paths
        ]

    def resolve_http_methods(
        self, class_mapping: EndpointMapping, method_mapping: EndpointMapping
    ) -> tuple[str, ...]:
        if not self.dialect.inherits_class_http_methods:
            return first_non_empty(method_mapping.http_methods, self.dialect.default_http_methods())
        return first_non_empty(
            method_mapping.http_methods,
            class_mapping.http_methods,
            self.dialect.default_http_methods(),
        )

"""JAX-RS dialect.

One annotation per HTTP verb, with paths and media types declared by
separate annotations. Only methods declare HTTP methods, and a method
without a verb annotation is not an endpoint.
"""

from restdoc.collector.docs import PATHVAR_TAG, QUERYPARAM_TAG, binding_text, request_body_text
from restdoc.model.base import EndpointMapping, PathVar, QueryParam, RequestBody
from restdoc.model.code import ClassDecl, MethodDecl

HTTP_VERBS = ("GET", "POST", "PUT", "DELETE", "HEAD")


class JaxRsDialect:
    name = "jaxrs"
    inherits_class_http_methods = False

    def __init__(self, package: str = "javax.ws.rs."):
        self.package = package
        # parameters typed inside the framework (javax.*) are never the body
        self.framework_prefix = package.split(".", 1)[0] + "."
        self.verb_annotations = {package + verb: verb for verb in HTTP_VERBS}
        self.path_annotation = package + "Path"
        self.consumes_annotation = package + "Consumes"
        self.produces_annotation = package + "Produces"
        self.pathvar_annotation = package + "PathParam"
        self.param_annotation = package + "QueryParam"

    def class_qualifies(self, cls: ClassDecl) -> bool:
        if any(a.name.startswith(self.package) for a in cls.annotations):
            return True
        return any(self.method_qualifies(m) for m in cls.methods)

    def method_qualifies(self, method: MethodDecl) -> bool:
        return any(a.name in self.verb_annotations for a in method.annotations)

    def extract_mapping(self, decl: ClassDecl | MethodDecl) -> EndpointMapping:
        paths: list[str] = []
        http_methods: list[str] = []
        consumes: list[str] = []
        produces: list[str] = []

        for annotation in decl.annotations:
            if annotation.name in self.verb_annotations:
                http_methods.append(self.verb_annotations[annotation.name])
            elif annotation.name == self.path_annotation:
                paths.extend(annotation.value("value"))
            elif annotation.name == self.consumes_annotation:
                consumes.extend(annotation.value("value"))
            elif annotation.name == self.produces_annotation:
                produces.extend(annotation.value("value"))

        return EndpointMapping.of(paths, http_methods, consumes, produces)

    def extract_path_vars(self, method: MethodDecl) -> list[PathVar]:
        path_vars = []
        for parameter in method.parameters:
            annotation = parameter.annotation(self.pathvar_annotation)
            if annotation is None:
                continue
            name = annotation.first("value") or parameter.name
            path_vars.append(
                PathVar(
                    name=name,
                    description=binding_text(method, PATHVAR_TAG, name, parameter),
                    type=parameter.type,
                )
            )
        return path_vars

    def extract_query_params(self, method: MethodDecl) -> list[QueryParam]:
        query_params = []
        for parameter in method.parameters:
            annotation = parameter.annotation(self.param_annotation)
            if annotation is None:
                continue
            name = annotation.first("value") or parameter.name
            query_params.append(
                QueryParam(
                    name=name,
                    required=False,
                    description=binding_text(method, QUERYPARAM_TAG, name, parameter),
                    type=parameter.type,
                )
            )
        return query_params

    def extract_request_body(self, method: MethodDecl) -> RequestBody | None:
        # first unannotated, non-framework parameter wins; later candidates are dropped
        for parameter in method.parameters:
            if parameter.annotations or parameter.type.startswith(self.framework_prefix):
                continue
            return RequestBody(
                parameter_name=parameter.name,
                description=request_body_text(method, parameter),
                type=parameter.type,
            )
        return None

    def default_http_methods(self) -> tuple[str, ...]:
        return ()

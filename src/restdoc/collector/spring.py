"""Spring MVC dialect.

A single @RequestMapping carries paths, HTTP methods and media types at
class or method level. Methods without an explicit HTTP method are GET.
"""

from restdoc.collector.docs import PATHVAR_TAG, QUERYPARAM_TAG, binding_text, request_body_text
from restdoc.model.base import EndpointMapping, PathVar, QueryParam, RequestBody
from restdoc.model.code import ClassDecl, MethodDecl

ANNOTATION_PACKAGE = "org.springframework.web.bind.annotation."

CONTROLLER_ANNOTATIONS = (
    "org.springframework.stereotype.Controller",
    ANNOTATION_PACKAGE + "RestController",
)
MAPPING_ANNOTATION = ANNOTATION_PACKAGE + "RequestMapping"
PATHVAR_ANNOTATION = ANNOTATION_PACKAGE + "PathVariable"
PARAM_ANNOTATION = ANNOTATION_PACKAGE + "RequestParam"
REQUESTBODY_ANNOTATION = ANNOTATION_PACKAGE + "RequestBody"


class SpringDialect:
    name = "spring"
    inherits_class_http_methods = True

    def class_qualifies(self, cls: ClassDecl) -> bool:
        return any(a.name in CONTROLLER_ANNOTATIONS for a in cls.annotations)

    def method_qualifies(self, method: MethodDecl) -> bool:
        return method.annotation(MAPPING_ANNOTATION) is not None

    def extract_mapping(self, decl: ClassDecl | MethodDecl) -> EndpointMapping:
        mapping = decl.annotation(MAPPING_ANNOTATION)
        if mapping is None:
            return EndpointMapping()

        # RequestMethod.POST -> POST
        http_methods = [value.rsplit(".", 1)[-1].upper() for value in mapping.value("method")]
        return EndpointMapping.of(
            paths=mapping.value("value") or mapping.value("path"),
            http_methods=http_methods,
            consumes=mapping.value("consumes"),
            produces=mapping.value("produces"),
        )

    def extract_path_vars(self, method: MethodDecl) -> list[PathVar]:
        path_vars = []
        for parameter in method.parameters:
            annotation = parameter.annotation(PATHVAR_ANNOTATION)
            if annotation is None:
                continue
            name = annotation.first("value", "name") or parameter.name
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
            annotation = parameter.annotation(PARAM_ANNOTATION)
            if annotation is None:
                continue
            name = annotation.first("value", "name") or parameter.name

            # required unless stated otherwise; a default value always makes it optional
            required = True
            explicit = annotation.first("required")
            if explicit is not None:
                required = explicit.strip().lower() == "true"
            if annotation.value("defaultValue"):
                required = False

            query_params.append(
                QueryParam(
                    name=name,
                    required=required,
                    description=binding_text(method, QUERYPARAM_TAG, name, parameter),
                    type=parameter.type,
                )
            )
        return query_params

    def extract_request_body(self, method: MethodDecl) -> RequestBody | None:
        for parameter in method.parameters:
            if parameter.annotation(REQUESTBODY_ANNOTATION) is not None:
                return RequestBody(
                    parameter_name=parameter.name,
                    description=request_body_text(method, parameter),
                    type=parameter.type,
                )
        return None

    def default_http_methods(self) -> tuple[str, ...]:
        return ("GET",)

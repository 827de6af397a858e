"""Documentation override tags and the text fallback chain."""

from typing import Callable

from restdoc.model.code import DocComment, MethodDecl, ParameterDecl

IGNORE_TAG = "ignore"
CONTEXT_TAG = "contextPath"
NAME_TAG = "name"
PATHVAR_TAG = "pathVar"
QUERYPARAM_TAG = "queryParam"
REQUESTBODY_TAG = "requestBody"

Lookup = Callable[[], str | None]


def first_text(*lookups: Lookup) -> str:
    """Evaluate lookups in order and return the first non-None result, else ""."""
    for lookup in lookups:
        text = lookup()
        if text is not None:
            return text
    return ""


def first_tag_value(doc: DocComment, tag: str) -> str | None:
    values = doc.tag_values(tag)
    return values[0].strip() if values else None


def find_named_text(tag_texts: list[str], name: str) -> str | None:
    """Find the text of a "<name> <text>" tag whose first word is name."""
    for text in tag_texts:
        words = text.split(None, 1)
        if words and words[0] == name:
            return words[1].strip() if len(words) > 1 else ""
    return None


def has_tag(doc: DocComment, tag: str) -> bool:
    return bool(doc.tag_values(tag))


def binding_text(method: MethodDecl, tag: str, bound_name: str, parameter: ParameterDecl) -> str:
    """Description of a bound parameter: override tag, then @param, then empty."""
    return first_text(
        lambda: find_named_text(method.doc.tag_values(tag), bound_name),
        lambda: method.doc.param_text(parameter.name),
    )


def request_body_text(method: MethodDecl, parameter: ParameterDecl) -> str:
    return first_text(
        lambda: first_tag_value(method.doc, REQUESTBODY_TAG),
        lambda: method.doc.param_text(parameter.name),
    )

"""Markdown writer — renders the endpoint catalog as a readable document."""

import re

from restdoc.model.base import ClassDescriptor, Endpoint
from restdoc.writer.options import RenderOptions

_PACKAGE_PREFIX = re.compile(r"\b(?:[a-z_]\w*\.)+(?=[A-Za-z_])")


def render_markdown(descriptors: list[ClassDescriptor], options: RenderOptions) -> str:
    """Render all class descriptors into one Markdown document."""
    parts = [f"# {options.title}"]
    for descriptor in descriptors:
        parts.append(_render_class(descriptor))
    return "\n\n".join(parts) + "\n"


def _render_class(descriptor: ClassDescriptor) -> str:
    lines = [f"## {descriptor.name}"]
    if descriptor.context_path:
        lines.append(f"Context path: `{descriptor.context_path}`")
    if descriptor.description:
        lines.append(descriptor.description)
    for endpoint in descriptor.endpoints:
        lines.append(_render_endpoint(endpoint))
    return "\n\n".join(lines)


def _render_endpoint(endpoint: Endpoint) -> str:
    lines = [f"### {endpoint.http_method} {endpoint.path}"]
    if endpoint.description:
        lines.append(endpoint.description)

    if endpoint.path_vars:
        rows = [(pv.name, _short_type(pv.type), pv.description) for pv in endpoint.path_vars]
        lines.append("**Path variables**\n\n" + _table(("Name", "Type", "Description"), rows))

    if endpoint.query_params:
        rows = [
            (qp.name, _short_type(qp.type), "yes" if qp.required else "no", qp.description)
            for qp in endpoint.query_params
        ]
        lines.append("**Query parameters**\n\n" + _table(("Name", "Type", "Required", "Description"), rows))

    if endpoint.request_body:
        body = endpoint.request_body
        text = f"**Request body**: `{_short_type(body.type)}`"
        if body.description:
            text += f": {body.description}"
        lines.append(text)

    media = []
    if endpoint.consumes:
        media.append("- Consumes: " + ", ".join(f"`{c}`" for c in endpoint.consumes))
    if endpoint.produces:
        media.append("- Produces: " + ", ".join(f"`{p}`" for p in endpoint.produces))
    media.append(f"- Returns: `{_short_type(endpoint.return_type)}`")
    lines.append("\n".join(media))

    return "\n\n".join(lines)


def _table(header: tuple[str, ...], rows: list[tuple[str, ...]]) -> str:
    out = ["| " + " | ".join(header) + " |", "|" + "|".join("---" for _ in header) + "|"]
    for row in rows:
        out.append("| " + " | ".join(_cell(c) for c in row) + " |")
    return "\n".join(out)


def _cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


def _short_type(type_ref: str) -> str:
    # java.util.List<com.acme.User> -> List<User>
    return _PACKAGE_PREFIX.sub("", type_ref)

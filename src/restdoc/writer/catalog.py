"""JSON writer: dumps the resolved catalog as machine-readable data."""

import json

from restdoc.model.base import ClassDescriptor
from restdoc.writer.options import RenderOptions


def render_catalog(descriptors: list[ClassDescriptor], options: RenderOptions) -> str:
    doc = {
        "title": options.title,
        "version": options.api_version,
        "classes": [d.model_dump(mode="json") for d in descriptors],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"

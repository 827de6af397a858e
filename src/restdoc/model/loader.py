"""Declaration document loader.

Reads a YAML or JSON description of the declared classes into a CodeModel.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from restdoc.config import get_logger
from restdoc.errors import CodeModelError
from restdoc.model.code import CodeModel

logger = get_logger(__name__)


def load_code_model(file_path: Path) -> CodeModel:
    """Parse a declaration document file into a CodeModel."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CodeModelError(f"cannot read {file_path}: {e}") from e

    model = parse_code_model(text, source=str(file_path))
    logger.info("loaded code model", path=str(file_path), classes=len(model.classes))
    return model


def parse_code_model(text: str, source: str = "<string>") -> CodeModel:
    # YAML is a superset of JSON, so one parser covers both formats
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CodeModelError(f"{source}: invalid YAML/JSON: {e}") from e

    if doc is None:
        doc = {}
    if isinstance(doc, list):
        doc = {"classes": doc}
    if not isinstance(doc, dict):
        raise CodeModelError(f"{source}: expected a mapping with a 'classes' list")

    try:
        return CodeModel.model_validate(doc)
    except ValidationError as e:
        raise CodeModelError(f"{source}: {e}") from e

"""Options shared by the output writers."""

from pydantic import BaseModel

from restdoc.config import DEFAULT_API_VERSION, DEFAULT_BASE_PATH, DEFAULT_TITLE


class RenderOptions(BaseModel):
    title: str = DEFAULT_TITLE
    api_version: str = DEFAULT_API_VERSION
    base_path: str = DEFAULT_BASE_PATH

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    # the CLI points the root handler at the stderr of the current CliRunner invocation
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

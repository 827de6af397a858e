"""Exception hierarchy for restdoc."""


class RestDocError(Exception):
    """Base class for all restdoc errors."""


class CodeModelError(RestDocError):
    """The declaration document could not be read or validated."""


class ResolutionError(RestDocError):
    """A class could not be resolved into endpoints."""


class InheritanceCycleError(ResolutionError):
    """The superclass chain of a class loops back on itself."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__("inheritance cycle: " + " -> ".join(chain))


class OutputError(RestDocError):
    """The rendered document could not be written."""

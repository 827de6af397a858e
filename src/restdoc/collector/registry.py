"""Available dialects and the catalog-wide resolution entry point."""

from restdoc.collector.base import Dialect, EndpointResolver
from restdoc.collector.jaxrs import JaxRsDialect
from restdoc.collector.spring import SpringDialect
from restdoc.config import get_logger
from restdoc.model.base import ClassDescriptor
from restdoc.model.code import CodeModel

logger = get_logger(__name__)

DIALECTS = {
    "spring": SpringDialect,
    "jaxrs": JaxRsDialect,
}


def get_dialects(names=None) -> list[Dialect]:
    """Instantiate the named dialects, or all of them in registry order."""
    if not names:
        names = list(DIALECTS)
    unknown = [n for n in names if n not in DIALECTS]
    if unknown:
        raise ValueError(f"unknown dialect(s): {', '.join(unknown)}")
    return [DIALECTS[n]() for n in names]


def resolve_all(
    code_model: CodeModel,
    dialects: list[Dialect] | None = None,
    *,
    workers: int = 1,
    strict: bool = False,
) -> list[ClassDescriptor]:
    """Resolve every class under every dialect, in dialect then declaration order."""
    if dialects is None:
        dialects = get_dialects()

    descriptors: list[ClassDescriptor] = []
    for dialect in dialects:
        descriptors.extend(EndpointResolver(dialect).resolve(code_model, workers=workers, strict=strict))

    logger.info(
        "catalog resolved",
        descriptors=len(descriptors),
        endpoints=sum(len(d.endpoints) for d in descriptors),
    )
    return descriptors

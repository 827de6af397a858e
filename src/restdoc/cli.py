"""CLI entry point for restdoc."""

from fnmatch import fnmatch
from pathlib import Path

import click

from restdoc.collector.registry import DIALECTS, get_dialects, resolve_all
from restdoc.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_TITLE,
    configure_logging,
    get_logger,
)
from restdoc.errors import OutputError, RestDocError
from restdoc.model.base import ClassDescriptor, Endpoint
from restdoc.model.loader import load_code_model
from restdoc.writer.catalog import render_catalog
from restdoc.writer.markdown import render_markdown
from restdoc.writer.openapi import render_openapi
from restdoc.writer.options import RenderOptions

logger = get_logger(__name__)

WRITERS = {
    "markdown": render_markdown,
    "openapi": render_openapi,
    "catalog": render_catalog,
}


def _filter_endpoints(endpoints: list[Endpoint], patterns: tuple[str, ...]) -> list[Endpoint]:
    """Keep endpoints matching any "METHOD /path-glob" or "/path-glob" pattern."""
    result = []
    for ep in endpoints:
        for pattern in patterns:
            method, _, path = pattern.strip().rpartition(" ")
            if method and method.strip().upper() != ep.http_method:
                continue
            if fnmatch(ep.path, path):
                result.append(ep)
                break
    return result


def _filter_descriptors(descriptors: list[ClassDescriptor], patterns: tuple[str, ...]) -> list[ClassDescriptor]:
    if not patterns:
        return descriptors
    filtered = []
    for descriptor in descriptors:
        endpoints = _filter_endpoints(list(descriptor.endpoints), patterns)
        if endpoints:
            filtered.append(descriptor.model_copy(update={"endpoints": tuple(endpoints)}))
    return filtered


def _resolve(model_path: Path, dialects: tuple[str, ...], workers: int, strict: bool) -> list[ClassDescriptor]:
    try:
        code_model = load_code_model(model_path)
        return resolve_all(code_model, get_dialects(dialects), workers=workers, strict=strict)
    except RestDocError as e:
        raise click.ClickException(str(e)) from e


def _write_output(output: Path, content: str) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"cannot write {output}: {e}") from e


dialect_option = click.option(
    "--dialect",
    "dialects",
    multiple=True,
    type=click.Choice(list(DIALECTS)),
    help="Routing dialect to resolve (repeatable). Defaults to all.",
)
filter_option = click.option(
    "--filter",
    "patterns",
    multiple=True,
    help='Only keep endpoints matching "METHOD /path-glob" or "/path-glob" (repeatable).',
)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
def main(verbose: int):
    """restdoc — build REST endpoint documentation from annotated handler declarations."""
    if verbose >= 2:
        configure_logging("DEBUG")
    elif verbose == 1:
        configure_logging("INFO")
    else:
        configure_logging(DEFAULT_LOG_LEVEL)


@main.command()
@click.argument("model_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path.")
@click.option("--format", "fmt", default=DEFAULT_OUTPUT_FORMAT, type=click.Choice(list(WRITERS)), help="Output format.")
@click.option("--title", default=DEFAULT_TITLE, help="Document title.")
@click.option("--api-version", default=DEFAULT_API_VERSION, help="API version (OpenAPI info.version).")
@click.option("--base-path", default=DEFAULT_BASE_PATH, help="Server base path (OpenAPI servers).")
@dialect_option
@filter_option
@click.option("--workers", default=1, type=click.IntRange(min=1), help="Resolve classes in parallel.")
@click.option("--strict", is_flag=True, help="Fail on the first class that cannot be resolved.")
def generate(
    model_path: Path,
    output: Path,
    fmt: str,
    title: str,
    api_version: str,
    base_path: str,
    dialects: tuple[str, ...],
    patterns: tuple[str, ...],
    workers: int,
    strict: bool,
):
    """Resolve endpoints from a declaration document and render them."""
    click.echo(f"Resolving {model_path}...")
    descriptors = _filter_descriptors(_resolve(model_path, dialects, workers, strict), patterns)
    total = sum(len(d.endpoints) for d in descriptors)
    click.echo(f"Found {total} endpoints in {len(descriptors)} classes.")

    options = RenderOptions(title=title, api_version=api_version, base_path=base_path)
    content = WRITERS[fmt](descriptors, options)
    try:
        _write_output(output, content)
    except OutputError as e:
        logger.error("output failed", path=str(output), error=str(e))
        raise click.ClickException(str(e)) from e
    click.echo(f"Documentation ({fmt}) saved to {output}")


@main.command("list")
@click.argument("model_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@dialect_option
@filter_option
def list_endpoints(model_path: Path, dialects: tuple[str, ...], patterns: tuple[str, ...]):
    """Print every resolved endpoint as "METHOD path  (class)"."""
    descriptors = _filter_descriptors(_resolve(model_path, dialects, 1, False), patterns)
    for descriptor in descriptors:
        for ep in descriptor.endpoints:
            click.echo(f"{ep.http_method:<7} {ep.path}  ({descriptor.name})")

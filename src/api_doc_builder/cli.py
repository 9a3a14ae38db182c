"""CLI entry point for api-doc-builder."""

import logging
from pathlib import Path

import click

from api_doc_builder.errors import DocBuilderError
from api_doc_builder.generator.layout import DocumentMeta, Layout, assemble
from api_doc_builder.generator.pdf import PdfRenderer
from api_doc_builder.generator.viewer import write_viewer
from api_doc_builder.parser.swagger import extract, load_document

PDF_NAME = "api-docs.pdf"
HTML_NAME = "index.html"


def _meta_options(func):
    """Document metadata options, prompted for when not given on the command line."""
    options = [
        click.option("--title", prompt="Document title", default="API Documentation", help="Document title."),
        click.option("--subject", prompt="Subject", default="Generated API documentation", help="Document subject."),
        click.option("--author", prompt="Author", default="", help="Document author."),
        click.option("--doc-version", prompt="API version", default="", help="API version shown on the cover page."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(doc_path: Path, strict: bool) -> tuple[str, list]:
    """Read and extract the document, turning pipeline errors into CLI errors."""
    try:
        text, doc = load_document(doc_path)
        endpoints = extract(doc, strict=strict)
    except DocBuilderError as e:
        raise click.ClickException(str(e)) from e
    return text, endpoints


def _build_layout(doc_path: Path, strict: bool, meta: DocumentMeta) -> tuple[str, Layout]:
    click.echo(f"Parsing {doc_path}...")
    text, endpoints = _load(doc_path, strict)
    click.echo(f"Found {len(endpoints)} endpoints.")
    return text, assemble(endpoints, meta)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Doc Builder: generate PDF documentation and a Swagger UI page from API specs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output PDF file path.")
@click.option("--strict", is_flag=True, help="Fail when the document has no paths collection.")
@_meta_options
def gen_pdf(doc_path: Path, output: Path, strict: bool, title: str, subject: str, author: str, doc_version: str):
    """Generate PDF documentation from an API description."""
    meta = DocumentMeta(title=title, subject=subject, author=author, version=doc_version)
    _, layout = _build_layout(doc_path, strict, meta)

    click.echo("Rendering PDF...")
    PdfRenderer().render(layout, output)
    click.echo(f"PDF documentation saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output HTML file path.")
@click.option("--title", prompt="Document title", default="API Documentation", help="Page title.")
def gen_html(doc_path: Path, output: Path, title: str):
    """Generate a Swagger UI page embedding the API description."""
    click.echo(f"Reading {doc_path}...")
    text, _ = _load(doc_path, strict=False)

    write_viewer(output, title, text)
    click.echo(f"Swagger UI page saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for all generated files.")
@click.option("--strict", is_flag=True, help="Fail when the document has no paths collection.")
@_meta_options
def run(doc_path: Path, output: Path, strict: bool, title: str, subject: str, author: str, doc_version: str):
    """Full pipeline: parse doc -> PDF documentation -> Swagger UI page."""
    # Step 1: Parse and lay out
    meta = DocumentMeta(title=title, subject=subject, author=author, version=doc_version)
    text, layout = _build_layout(doc_path, strict, meta)

    output.mkdir(parents=True, exist_ok=True)

    # Step 2: PDF
    click.echo("Rendering PDF...")
    pdf_path = PdfRenderer().render(layout, output / PDF_NAME)
    click.echo(f"  PDF documentation saved to {pdf_path}")

    # Step 3: Viewer page
    html_path = write_viewer(output / HTML_NAME, title, text)
    click.echo(f"  Swagger UI page saved to {html_path}")

    click.echo(f"Done! Generated 2 files in {output}")

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from sface_formatter.engine import FormatterEngine
from sface_formatter.errors import SfaceFormatterError
from sface_formatter.nodes import Block, Comment, Element, Expression, Node, Text, Whitespace
from sface_formatter.phases import FinalNewline, Indent, default_phases
from sface_formatter.schema import load_document
from sface_formatter.tagger import contextualize, tag_document
from sface_formatter.walker import TreeWalker

from .config import FormatConfig
from .converters import result_to_report
from .models import FileStatus

app = typer.Typer(help="sface-format - Pretty-print component templates from parsed tree documents")


class Stage(str, Enum):
    PARSED = "parsed"
    TAGGED = "tagged"
    CONTEXT = "context"
    INDENTED = "indented"


def _resolve_config(config_file: Path) -> Path:
    # Without a dedicated config file, look for the table in pyproject.toml
    if config_file.exists():
        return config_file
    return Path("pyproject.toml")


@app.command("format")
def format_templates(
    files: list[Path] = typer.Argument(..., help="Tree documents (.json) to format"),
    check: bool = typer.Option(False, help="Report files that would change without writing them"),
    stdout: bool = typer.Option(False, help="Print formatted templates instead of writing them"),
    config_file: Path = typer.Option(
        Path(".sface-format.toml"), "--config", help="Path to config file"
    ),
    line_length: Optional[int] = typer.Option(None, help="Override the configured line length"),
):
    """Format templates described by tree documents"""
    config = FormatConfig(_resolve_config(config_file))
    engine = FormatterEngine(config.to_formatter_config(line_length))
    engine.add_default_phases()

    results = engine.format_files(files, write=not (check or stdout))
    reports = [result_to_report(r) for r in results.results]

    for report in reports:
        if report.status is FileStatus.ERROR:
            for error in report.errors:
                typer.echo(f"ERROR: {report.file_path} - {error}")
        elif stdout:
            typer.echo(report.source, nl=False)
        elif report.status is FileStatus.FORMATTED:
            verb = "Would reformat" if check else "Formatted"
            typer.echo(f"{verb} {report.file_path}")

    if not stdout:
        typer.echo(
            f"\n{results.total_files} files checked, {results.modified_files} "
            f"{'would be reformatted' if check else 'reformatted'}, {results.error_files} failed"
        )

    if results.error_files or (check and results.modified_files):
        raise typer.Exit(code=1)


def describe(node: Node) -> str:
    """One-line summary of a node for tree dumps"""
    if isinstance(node, Whitespace):
        return node.kind.value.upper()
    if isinstance(node, Text):
        return f"text {node.value!r}"
    if isinstance(node, Expression):
        return f"expression {node.code!r}"
    if isinstance(node, Comment):
        return f"comment ({node.visibility.value}) {node.text!r}"
    if isinstance(node, Element):
        names = "".join(f" {attribute.name}" for attribute in node.attributes)
        return f"<{node.tag}{names}>"
    if isinstance(node, Block):
        expression = f" {node.expression.code.strip()}" if node.expression else ""
        return f"{{#{node.name}{expression}}}"
    return repr(node)


@app.command()
def dump(
    file: Path = typer.Argument(..., help="Tree document to inspect"),
    stage: Stage = typer.Option(Stage.INDENTED, help="Pipeline stage to print"),
):
    """Print the node tree of a document at a pipeline stage"""
    try:
        document = load_document(file)
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    nodes = document.to_nodes()
    try:
        if stage is not Stage.PARSED:
            nodes = tag_document(nodes)
        if stage in (Stage.CONTEXT, Stage.INDENTED):
            for phase in default_phases():
                nodes = phase.apply(nodes)
        if stage is Stage.CONTEXT:
            nodes = contextualize(nodes)
        elif stage is Stage.INDENTED:
            nodes = Indent().apply(nodes)
    except SfaceFormatterError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    TreeWalker.walk(nodes, lambda node, depth: typer.echo("  " * depth + describe(node)))


@app.command("phases")
def list_phases():
    """List the layout phases in the order they run"""
    for phase in [*default_phases(), Indent(), FinalNewline()]:
        typer.echo(f"{phase.phase_id}  {phase.name:<42} {phase.description}")


if __name__ == "__main__":
    app()

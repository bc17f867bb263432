import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import SfaceFormatterError
from .expressions import ExpressionFormatter, PythonExpressionFormatter
from .models import FormatResult, FormatResults, FormatterConfig
from .nodes import Node
from .phases import FinalNewline, Indent, Phase, default_phases
from .render import Renderer
from .schema import TreeDocument, load_document
from .tagger import tag_document

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".json"


class FormatterEngine:
    """Core engine for formatting template trees through ordered layout phases."""

    def __init__(
        self, config: FormatterConfig, expression_formatter: Optional[ExpressionFormatter] = None
    ):
        self.config = config
        self.expression_formatter = expression_formatter or PythonExpressionFormatter()
        self.phases: List[Phase] = []

    def add_phase(self, phase: Phase) -> None:
        """Register a new layout phase; phases run in registration order."""
        self.phases.append(phase)

    def add_default_phases(self) -> None:
        for phase in default_phases():
            self.add_phase(phase)

    def format_nodes(self, nodes: Sequence[Node], config: Optional[FormatterConfig] = None) -> str:
        """Format a parsed tree into template text. Raises ``SfaceFormatterError``."""
        config = config or self.config
        current = tag_document(list(nodes))

        # Phase 1: structural layout
        for phase in self.phases:
            logger.debug("Running phase %s (%s)", phase.phase_id, phase.name)
            current = phase.apply(current)

        # Phase 2: indentation, always after every structural phase
        current = Indent().apply(current)
        current = FinalNewline(config.trailing_newline).apply(current)

        return Renderer(config, self.expression_formatter).render(current)

    def format_document(
        self, document: TreeDocument, existing: Optional[str] = None, file_path: str = ""
    ) -> FormatResult:
        """Format a tree document, comparing against the template text currently on disk."""
        config = replace(self.config, trailing_newline=document.trailing_newline)
        try:
            source = self.format_nodes(document.to_nodes(), config)
        except SfaceFormatterError as e:
            logger.warning("Failed to format %s: %s", file_path or "<document>", e)
            return FormatResult(source=None, modified=False, errors=[str(e)], file_path=file_path)
        return FormatResult(source=source, modified=source != existing, file_path=file_path)

    def target_path(self, document_path: Path, document: TreeDocument) -> Path:
        """Where the formatted template of a document is written."""
        if document.target:
            return document_path.parent / document.target
        if document_path.suffix == DOCUMENT_SUFFIX:
            return document_path.with_suffix("")
        return document_path.with_name(document_path.name + ".out")

    def format_files(self, files: List[Path], write: bool = True) -> FormatResults:
        """Batch format tree documents on disk."""
        results = []
        modified_count = 0
        error_count = 0
        for document_path in files:
            try:
                document = load_document(document_path)
                target = self.target_path(document_path, document)
                existing = target.read_text(encoding="utf-8") if target.exists() else None
                result = self.format_document(document, existing, str(target))
            except (OSError, ValueError) as e:
                logger.warning("Failed to read %s: %s", document_path, e)
                result = FormatResult(
                    source=None, modified=False, errors=[str(e)], file_path=str(document_path)
                )
            results.append(result)

            if result.errors:
                error_count += 1
            elif result.modified:
                modified_count += 1
                if write:
                    Path(result.file_path).write_text(result.source, encoding="utf-8")
                    logger.info("Formatted %s", result.file_path)
        return FormatResults(
            results=results,
            total_files=len(files),
            modified_files=modified_count,
            error_files=error_count,
        )

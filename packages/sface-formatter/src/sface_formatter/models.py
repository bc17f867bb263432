from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_LINE_LENGTH = 98


@dataclass(frozen=True)
class FormatterConfig:
    indent_size: int = 2
    line_length: int = DEFAULT_LINE_LENGTH
    # Starting depth, for templates embedded in an indented host file
    indent: int = 0
    trailing_newline: bool = False

    @property
    def tab(self) -> str:
        return " " * self.indent_size


@dataclass
class FormatResult:
    source: Optional[str]
    modified: bool
    errors: List[str] = field(default_factory=list)
    file_path: str = ""


@dataclass
class FormatResults:
    results: List[FormatResult]
    total_files: int
    modified_files: int
    error_files: int

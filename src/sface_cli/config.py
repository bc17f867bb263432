import tomllib
from pathlib import Path

from sface_formatter.models import DEFAULT_LINE_LENGTH, FormatterConfig


class FormatConfig:
    """Handles loading of the [tool.sface-format] table from .sface-format.toml or pyproject.toml"""

    def __init__(self, config_path: Path | None = None):
        self.line_length: int = DEFAULT_LINE_LENGTH
        self.indent_size: int = 2
        self.indent: int = 0

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            # Fallback to defaults if the file cannot be read
            return

        try:
            format_data = data.get("tool", {}).get("sface-format", {})
            line_length = int(format_data.get("line_length", self.line_length))
            indent_size = int(format_data.get("indent_size", self.indent_size))
            indent = int(format_data.get("indent", self.indent))
        except (AttributeError, TypeError, ValueError):
            # Fallback to defaults if a value is not a number
            return
        self.line_length, self.indent_size, self.indent = line_length, indent_size, indent

    def to_formatter_config(self, line_length: int | None = None) -> FormatterConfig:
        """Build the engine config, with a command line line length taking precedence"""
        return FormatterConfig(
            indent_size=self.indent_size,
            line_length=line_length or self.line_length,
            indent=self.indent,
        )

from sface_formatter.models import FormatResult

from .models import FileReport, FileStatus


def result_to_report(result: FormatResult) -> FileReport:
    """Convert an internal dataclass result to an external Pydantic report"""
    if result.errors:
        status = FileStatus.ERROR
    elif result.modified:
        status = FileStatus.FORMATTED
    else:
        status = FileStatus.UNCHANGED
    return FileReport(
        file_path=result.file_path,
        status=status,
        errors=list(result.errors),
        source=result.source,
    )

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class FileStatus(str, Enum):
    FORMATTED = "FORMATTED"
    UNCHANGED = "UNCHANGED"
    ERROR = "ERROR"


class FileReport(BaseModel):
    file_path: str
    status: FileStatus
    errors: List[str] = []
    source: Optional[str] = None

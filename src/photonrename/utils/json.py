"""JSON serialization helpers for photonrename.

Used by the CLI's --json output. Handles the types pydantic's model_dump leaves
as Python objects: datetime (ISO 8601), Path (string) and Enum (value).
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder for photonrename plans and scan results."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert datetime, Path and Enum objects to JSON-serializable values."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def dumps(data: Any, indent: int = 2) -> str:
    """Serialize *data* with DateTimeEncoder."""
    return json.dumps(data, cls=DateTimeEncoder, indent=indent, ensure_ascii=False)

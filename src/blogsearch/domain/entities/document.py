"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Document:
    """Document with normalized title and body."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

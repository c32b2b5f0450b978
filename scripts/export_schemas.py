"""Export JSON schemas for the public request/response models."""

import json
from pathlib import Path

from pydantic import BaseModel

from backend.condo.models import (
    Booking,
    ConversationSummary,
    CreateBookingRequest,
    CreateDocumentRequest,
    CreateNoticeRequest,
    CreateVisitorRequest,
    DocumentOut,
    Message,
    NoticeOut,
    SendMessageRequest,
    UpdateBookingRequest,
    UpdateDocumentRequest,
    UpdateVisitorRequest,
    UserProfile,
    Visitor,
)

EXPORTED: list[type[BaseModel]] = [
    UserProfile,
    Booking,
    CreateBookingRequest,
    UpdateBookingRequest,
    Visitor,
    CreateVisitorRequest,
    UpdateVisitorRequest,
    Message,
    SendMessageRequest,
    ConversationSummary,
    NoticeOut,
    CreateNoticeRequest,
    DocumentOut,
    CreateDocumentRequest,
    UpdateDocumentRequest,
]


def export_schemas(schemas_dir: Path) -> list[Path]:
    """Write one ``<Model>.schema.json`` per exported model."""
    schemas_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for model in EXPORTED:
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(), f, indent=2)
        written.append(path)
    return written


def main() -> None:
    """Export schemas to docs/schemas/."""
    for path in export_schemas(Path("docs/schemas")):
        print(f"Exported {path.stem} to {path}")


if __name__ == "__main__":
    main()

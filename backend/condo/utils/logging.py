"""Logging setup and structured audit logging for workflow state changes."""

import logging
import sys
from typing import Any
from uuid import UUID

from backend.condo.db.context import RequestContext

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO") -> None:
    """Install a single stdout handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class StructuredAuditLogger:
    """Structured logger for workflow operations."""

    def log_action(
        self,
        ctx: RequestContext | None,
        entity: str,
        entity_id: UUID | None,
        action: str,
        outcome: str,
        reason: str | None = None,
    ) -> None:
        """Log a workflow action with structured data."""
        log_data: dict[str, Any] = {
            "entity": entity,
            "entity_id": str(entity_id) if entity_id else None,
            "action": action,
            "outcome": outcome,
            "actor_id": str(ctx.user_id) if ctx else None,
            "actor_role": ctx.role.value if ctx else None,
        }

        if reason:
            log_data["reason"] = reason

        log_msg = f"{entity} {action}: {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


audit_log = StructuredAuditLogger()

"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus exposition of the registered counters:

    - login_attempts_total{outcome}
    - workflow_actions_total{entity, action, outcome}
    - chat_messages_sent_total / chat_messages_read_total
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

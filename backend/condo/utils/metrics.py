"""Prometheus metrics for workflow activity."""

from prometheus_client import Counter

login_attempts_total = Counter(
    "login_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
)

workflow_actions_total = Counter(
    "workflow_actions_total",
    "Workflow operations by entity, action and outcome",
    ["entity", "action", "outcome"],
)

chat_messages_sent_total = Counter(
    "chat_messages_sent_total",
    "Chat messages accepted for delivery",
)

chat_messages_read_total = Counter(
    "chat_messages_read_total",
    "Chat messages flipped to read by a thread fetch",
)


class PrometheusWorkflowMetrics:
    """Prometheus-based workflow metrics implementation."""

    def inc_login(self, outcome: str) -> None:
        login_attempts_total.labels(outcome=outcome).inc()

    def inc_action(self, entity: str, action: str, outcome: str) -> None:
        workflow_actions_total.labels(entity=entity, action=action, outcome=outcome).inc()

    def inc_message_sent(self) -> None:
        chat_messages_sent_total.inc()

    def inc_messages_read(self, count: int) -> None:
        if count > 0:
            chat_messages_read_total.inc(count)


metrics = PrometheusWorkflowMetrics()

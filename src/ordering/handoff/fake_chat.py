"""Fake chat adapter — records handed-off messages for testing."""

from uuid import uuid4

from ordering.handoff.chat_link import build_chat_link
from ordering.handoff.chat_port import HandoffChannel


class FakeChatChannel(HandoffChannel):
    """Chat adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Chat handoff failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Chat handoff failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, body: str) -> dict:
        if not self.should_succeed:
            return {"status": "failed", "link": None, "error": self.failure_reason}

        message_id = f"chat-{uuid4().hex[:12]}"
        self.sent_messages.append({"message_id": message_id, "to": to, "body": body})
        return {"message_id": message_id, "status": "sent", "link": build_chat_link(to, body)}

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Chat handoff failed"

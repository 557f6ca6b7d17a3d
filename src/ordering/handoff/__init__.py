"""Handoff channel registry — where checkout summaries and delivery notices are sent.

Provides singleton access to the configured chat adapter. ``HANDOFF_CHANNEL``
selects it: ``chat_link`` (default) builds a pre-filled chat link, ``fake``
records messages in memory for tests.
"""

import os

from ordering.handoff.chat_port import HandoffChannel

DEFAULT_STORE_NUMBER = "918112296227"

_channel_instance: HandoffChannel | None = None


def store_number() -> str:
    return os.getenv("STORE_WHATSAPP_NUMBER", DEFAULT_STORE_NUMBER)


def get_channel() -> HandoffChannel:
    """Return the configured handoff adapter (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        channel_type = os.getenv("HANDOFF_CHANNEL", "chat_link")
        if channel_type == "chat_link":
            from ordering.handoff.chat_link import ChatLinkChannel

            _channel_instance = ChatLinkChannel()
        elif channel_type == "fake":
            from ordering.handoff.fake_chat import FakeChatChannel

            _channel_instance = FakeChatChannel()
        else:
            raise ValueError(f"Unknown handoff channel: {channel_type}")
    return _channel_instance


def set_channel(channel: HandoffChannel) -> None:
    """Replace the handoff adapter (e.g. with a configured fake in tests)."""
    global _channel_instance
    _channel_instance = channel


def reset_channel() -> None:
    """Reset the handoff singleton (useful for testing)."""
    global _channel_instance
    _channel_instance = None

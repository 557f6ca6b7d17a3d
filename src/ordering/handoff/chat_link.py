"""Chat link adapter — builds a pre-filled ``wa.me`` link for the shopper to open."""

import re
from urllib.parse import quote

from ordering.handoff.chat_port import HandoffChannel

CHAT_LINK_BASE = "https://wa.me"
COUNTRY_PREFIX = "91"


def normalise_phone(phone: str) -> str:
    """Digits only, with the country prefix added when it is missing."""
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return ""
    return digits if digits.startswith(COUNTRY_PREFIX) else COUNTRY_PREFIX + digits


def build_chat_link(to: str, body: str) -> str:
    return f"{CHAT_LINK_BASE}/{normalise_phone(to)}?text={quote(body, safe='')}"


class ChatLinkChannel(HandoffChannel):
    """Nothing leaves the process: the link is returned for the client to open."""

    def send(self, to: str, body: str) -> dict:
        if not normalise_phone(to):
            return {"status": "failed", "link": None, "error": f"Invalid chat number: {to!r}"}
        return {"status": "sent", "link": build_chat_link(to, body)}

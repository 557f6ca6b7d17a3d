"""Chat channel port — abstract interface for handing a message to the store's chat."""

from abc import ABC, abstractmethod


class HandoffChannel(ABC):
    """Abstract interface for outbound chat adapters."""

    @abstractmethod
    def send(self, to: str, body: str) -> dict:
        """Hand a text message to the messaging channel.

        Returns:
            dict with keys: status ("sent" or "failed"), link (the pre-filled
            chat link, when one was built), error (optional)
        """
        ...

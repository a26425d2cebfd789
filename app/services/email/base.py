"""Base email sender interface"""

from abc import ABC, abstractmethod


class EmailSender(ABC):
    """Abstract base class for email senders"""

    @abstractmethod
    async def send(
        self,
        to: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> bool:
        """
        Send an email.

        Returns True if the transport accepted the message, False otherwise.
        Implementations log failures instead of raising.
        """

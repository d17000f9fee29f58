"""Abstract interface for user notifications."""

from abc import ABC, abstractmethod


class NotificationService(ABC):
    """Abstract base class for transcription-completed notifications."""

    @abstractmethod
    def notify(
        self,
        recipient_email: str,
        recipient_name: str,
        file_name: str,
        link: str,
    ) -> None:
        """
        Tells a user that a file has been transcribed.

        Args:
            recipient_email: Destination address.
            recipient_name: Name used in the greeting.
            file_name: Display name of the transcribed file.
            link: URL of the file in the web app.

        Raises:
            SideEffectError: If the notification could not be sent.
        """

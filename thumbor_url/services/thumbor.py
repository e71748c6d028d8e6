from typing import Iterable, List, Optional

from thumbor_url.core.config import settings
from thumbor_url.core.errors import ConfigurationError
from thumbor_url.core.logging import get_logger
from thumbor_url.models.builder import Builder

logger = get_logger("thumbor_service")


class ThumborService:
    """Service for creating thumbor URL builders from application settings."""

    def __init__(self,
                 server: Optional[str] = None,
                 secret: Optional[str] = None,
                 passthrough_filetypes: Optional[Iterable[str]] = None):
        self.server = settings.thumbor_server if server is None else server
        self.secret = settings.thumbor_secret if secret is None else secret
        if passthrough_filetypes is None:
            passthrough_filetypes = settings.get_passthrough_filetypes()
        self.passthrough_filetypes: List[str] = list(passthrough_filetypes)

    @property
    def is_signing_enabled(self) -> bool:
        return bool(self.secret)

    def url(self, original: str) -> Builder:
        """Start a URL builder for an original image.

        Args:
            original: Absolute URL or relative path of the source image

        Returns:
            A new Builder bound to the configured server and secret

        Raises:
            ConfigurationError: If no thumbor server is configured
        """
        if not self.server:
            raise ConfigurationError(
                "No thumbor server configured. Set THUMBOR_SERVER.",
                setting="thumbor_server"
            )

        return Builder(
            self.server,
            self.secret,
            original,
            passthrough_filetypes=self.passthrough_filetypes
        )

    def status(self) -> dict:
        """Describe the configuration without exposing the secret."""
        return {
            "status": "ok" if self.server else "unconfigured",
            "server": self.server or None,
            "signing": self.is_signing_enabled,
            "passthrough_filetypes": self.passthrough_filetypes,
        }


# Create a singleton instance
thumbor_service = ThumborService()


def url(original: str) -> Builder:
    """
    Convenience function to start a URL builder from application settings.

    Args:
        original: Absolute URL or relative path of the source image

    Returns:
        A new Builder bound to the configured thumbor server
    """
    return thumbor_service.url(original)

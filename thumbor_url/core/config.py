import os
from typing import List

from pydantic import BaseModel, Field, ConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


DEFAULT_PASSTHROUGH_FILETYPES = "webp,jpeg,jpg,gif,png"


class Settings(BaseModel):
    """Application settings."""
    # Thumbor Configuration
    thumbor_server: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_SERVER", "")
    )
    # An empty secret switches URL generation to unsafe (unsigned) mode
    thumbor_secret: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_SECRET", "")
    )
    thumbor_passthrough_filetypes: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_PASSTHROUGH_FILETYPES", DEFAULT_PASSTHROUGH_FILETYPES)
    )

    # API settings
    api_prefix: str = Field(
        default_factory=lambda: os.getenv("API_PREFIX", "")
    )

    # Server settings
    workers: int = Field(
        default_factory=lambda: int(os.getenv("WORKERS", "1"))
    )

    model_config = ConfigDict()

    def get_passthrough_filetypes(self) -> List[str]:
        """Get the configured proxyable file extensions, lowercased and without dots."""
        filetypes = []
        for filetype in self.thumbor_passthrough_filetypes.split(","):
            filetype = filetype.strip().lstrip(".").lower()
            if filetype and filetype not in filetypes:
                filetypes.append(filetype)
        return filetypes


# Create global settings instance
settings = Settings()

import base64
import hashlib
import hmac
from dataclasses import dataclass, field
from typing import Optional


def sign(secret: str, payload: str) -> str:
    """Sign a URL payload the way thumbor verifies it.

    Args:
        secret: Shared thumbor security key
        payload: Command segment and original image, joined by "/"

    Returns:
        URL-safe base64 HMAC-SHA1 digest without "=" padding
    """
    # Create the HMAC
    h = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha1)

    # Encode the signature in base64
    signature = base64.urlsafe_b64encode(h.digest()).rstrip(b"=")

    return signature.decode()


@dataclass(frozen=True)
class Url:
    """A thumbor URL for one original image and one command segment.

    With an empty or missing secret the URL is unsigned and starts with
    "unsafe/"; otherwise the first path segment is the signature of
    "<commands>/<original>".
    """

    server: str
    secret: Optional[str] = field(repr=False)
    original: str
    commands: str = ""
    signature: Optional[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        signature = sign(self.secret, self.payload) if self.secret else None
        object.__setattr__(self, "signature", signature)

    @property
    def payload(self) -> str:
        if not self.commands:
            return self.original
        return f"{self.commands}/{self.original}"

    @property
    def is_signed(self) -> bool:
        return self.signature is not None

    @property
    def path(self) -> str:
        return f"{self.signature or 'unsafe'}/{self.payload}"

    def render(self) -> str:
        """Get the full URL string."""
        return f"{self.server.rstrip('/')}/{self.path}"

    def __str__(self) -> str:
        return self.render()

"""
URL Builder
Incrementally constructs thumbor Url objects for one original image.

Example:

    Builder.construct("http://thumbor.example.com", "my-secret-key",
                      "http://images.example.com/llamas.jpg") \\
        .fit_in(320, 240) \\
        .add_filter("brightness", 42) \\
        .build()
"""

import copy
import inspect
from pathlib import PurePosixPath
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlparse

from thumbor_url.core.errors import MethodNotFoundError, OperationArgumentsError
from thumbor_url.core.logging import get_logger
from thumbor_url.models.command_set import CommandSet, Dimension
from thumbor_url.models.url import Url

logger = get_logger("builder")

DEFAULT_PASSTHROUGH_FILETYPES = ("webp", "jpeg", "jpg", "gif", "png")


def get_filetype(original: str) -> str:
    """Get the lowercased file extension of an image locator.

    Query strings and fragments are ignored, so
    "http://host/a.JPG?v=2" gives "jpg".
    """
    path = urlparse(original).path
    return PurePosixPath(path).suffix.lstrip(".").lower()


class Builder:
    """Chainable front door for building a thumbor URL.

    Server, secret and original are fixed at construction; every
    transformation call updates the CommandSet and returns the builder.
    Builders are not meant to be shared between concurrent mutators; use
    clone() to branch a chain.
    """

    def __init__(self,
                 server: str,
                 secret: Optional[str],
                 original: str,
                 passthrough_filetypes: Optional[Iterable[str]] = None):
        self._server = server
        self._secret = secret or ""
        self._original = original
        if passthrough_filetypes is None:
            passthrough_filetypes = DEFAULT_PASSTHROUGH_FILETYPES
        self._passthrough_filetypes = frozenset(
            filetype.lstrip(".").lower() for filetype in passthrough_filetypes
        )
        self._commands = CommandSet()

    @classmethod
    def construct(cls, server: str, secret: Optional[str], original: str, **kwargs) -> "Builder":
        return cls(server, secret, original, **kwargs)

    @property
    def server(self) -> str:
        return self._server

    @property
    def original(self) -> str:
        return self._original

    @property
    def commands(self) -> CommandSet:
        """A copy of the current commands."""
        return self._commands.copy()

    def trim(self, color_source: Optional[str] = None, tolerance: Optional[int] = None) -> "Builder":
        self._commands.trim(color_source, tolerance)
        return self

    def crop(self, top_left_x: int, top_left_y: int, bottom_right_x: int, bottom_right_y: int) -> "Builder":
        self._commands.crop(top_left_x, top_left_y, bottom_right_x, bottom_right_y)
        return self

    def fit_in(self, width: Dimension, height: Dimension) -> "Builder":
        self._commands.fit_in(width, height)
        return self

    def resize(self, width: Dimension, height: Dimension) -> "Builder":
        self._commands.resize(width, height)
        return self

    def halign(self, halign: str) -> "Builder":
        self._commands.halign(halign)
        return self

    def valign(self, valign: str) -> "Builder":
        self._commands.valign(valign)
        return self

    def smart_crop(self, smart_crop: bool = True) -> "Builder":
        self._commands.smart_crop(smart_crop)
        return self

    def add_filter(self, filter_name: str, *args: Any) -> "Builder":
        self._commands.add_filter(filter_name, *args)
        return self

    def metadata_only(self, metadata_only: bool = True) -> "Builder":
        self._commands.metadata_only(metadata_only)
        return self

    def clone(self) -> "Builder":
        """Get an independent builder that starts from the current commands."""
        return copy.copy(self)

    def __copy__(self) -> "Builder":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._commands = self._commands.copy()
        return clone

    def is_proxyable(self) -> bool:
        """Check whether the original's file type can be sent through thumbor."""
        return get_filetype(self._original) in self._passthrough_filetypes

    def build(self) -> Union[Url, str]:
        """Build the thumbor Url.

        Returns:
            A Url, or the original locator unchanged when its file type
            is not proxyable (e.g. svg or pdf)
        """
        if not self.is_proxyable():
            logger.debug(f"Passing through original with unsupported file type: {self._original}")
            return self._original

        url = Url(self._server, self._secret, self._original, self._commands.serialize())
        logger.debug(f"Built {'signed' if url.is_signed else 'unsafe'} thumbor URL for {self._original}")
        return url

    def render(self) -> str:
        """Get the URL string, or the pass-through original."""
        return str(self.build())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Builder(server={self._server!r}, original={self._original!r}, commands={self._commands.serialize()!r})"


class DynamicBuilder:
    """Applies operations to a Builder by name.

    For scripted callers such as the HTTP API. Names are resolved against a
    fixed operation table; anything else raises MethodNotFoundError.
    """

    OPERATIONS = {
        "trim": "trim",
        "crop": "crop",
        "fit_in": "fit_in",
        "fitIn": "fit_in",
        "resize": "resize",
        "halign": "halign",
        "valign": "valign",
        "smart_crop": "smart_crop",
        "smartCrop": "smart_crop",
        "add_filter": "add_filter",
        "addFilter": "add_filter",
        "metadata_only": "metadata_only",
        "metadataOnly": "metadata_only",
    }

    def __init__(self, builder: Builder):
        self.builder = builder

    @classmethod
    def operation_names(cls) -> List[str]:
        return sorted(cls.OPERATIONS)

    def call(self, name: str, *args: Any) -> "DynamicBuilder":
        """Apply a single named operation to the wrapped builder.

        Raises:
            MethodNotFoundError: If the name is not a CommandSet operation
            OperationArgumentsError: If the arguments do not fit the operation
        """
        if name not in self.OPERATIONS:
            raise MethodNotFoundError(name, target=CommandSet.__name__)

        method = getattr(self.builder, self.OPERATIONS[name])
        try:
            inspect.signature(method).bind(*args)
        except TypeError as e:
            raise OperationArgumentsError(name, args, reason=str(e)) from e

        method(*args)
        return self

    def apply(self, operations: Iterable[Union[Tuple[str, Sequence[Any]], Mapping[str, Any]]]) -> "DynamicBuilder":
        """Apply operations given as (name, args) pairs or {"name", "args"} mappings."""
        for operation in operations:
            if isinstance(operation, Mapping):
                name, args = operation["name"], operation.get("args") or ()
            else:
                name, args = operation
            self.call(name, *args)
        return self

    def build(self) -> Union[Url, str]:
        return self.builder.build()

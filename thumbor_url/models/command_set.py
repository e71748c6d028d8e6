"""
Command Set
Accumulates thumbor transformation commands and serializes them into the
path segment the thumbor URL parser expects.
"""

import re
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote


Dimension = Union[int, str]

# Characters left unescaped in string filter arguments. "(", ")" and ","
# delimit filter calls and are always escaped.
FILTER_ARG_SAFE_CHARS = "/:?%=&~\"';"

# A "%" that does not start a percent-escape is a literal percent sign
STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def format_filter_arg(arg: Any) -> str:
    """Render a single filter argument for the filters token.

    Existing percent-escapes in strings are kept, so pre-encoded values
    pass through unchanged.
    """
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, (int, float)):
        return str(arg)
    return STRAY_PERCENT.sub("%25", quote(str(arg), safe=FILTER_ARG_SAFE_CHARS))


class CommandSet:
    """Ordered set of thumbor commands.

    Each operation kind holds at most one value and a repeated call replaces
    it. Filters accumulate in call order. Arguments are not range checked;
    the thumbor server validates them.
    """

    def __init__(self):
        self._operations: Dict[str, Any] = {}
        self._filters: List[Tuple[str, Tuple[Any, ...]]] = []

    def trim(self, color_source: Optional[str] = None, tolerance: Optional[int] = None) -> None:
        """Trim surrounding space from the image.

        Args:
            color_source: Pixel used to pick the trim color, "top-left" or
                "bottom-right". The server default is used when omitted.
            tolerance: Euclidean color distance tolerated when trimming.
        """
        token = "trim"
        if color_source or tolerance is not None:
            token += f":{color_source or 'top-left'}"
        if tolerance is not None:
            token += f":{tolerance}"
        self._operations["trim"] = token

    def crop(self, top_left_x: int, top_left_y: int, bottom_right_x: int, bottom_right_y: int) -> None:
        """Manually crop the image to the given rectangle."""
        self._operations["crop"] = f"{top_left_x}x{top_left_y}:{bottom_right_x}x{bottom_right_y}"

    def fit_in(self, width: Dimension, height: Dimension) -> None:
        """Resize the image to fit inside a width x height box."""
        self._operations["dimensions"] = (True, width, height)

    def resize(self, width: Dimension, height: Dimension) -> None:
        """Resize the image.

        A dimension of 0 keeps the aspect ratio on that axis; a negative
        dimension flips the image along that axis.
        """
        self._operations["dimensions"] = (False, width, height)

    def halign(self, halign: str) -> None:
        """Horizontal alignment of the crop: left, center or right."""
        self._operations["halign"] = halign

    def valign(self, valign: str) -> None:
        """Vertical alignment of the crop: top, middle or bottom."""
        self._operations["valign"] = valign

    def smart_crop(self, smart_crop: bool) -> None:
        """Let the server pick crop boundaries from detected focal points."""
        self._operations["smart_crop"] = bool(smart_crop)

    def add_filter(self, filter_name: str, *args: Any) -> None:
        """Append a filter invocation, e.g. add_filter("brightness", 42)."""
        self._filters.append((filter_name, args))

    def metadata_only(self, metadata_only: bool) -> None:
        """Request image metadata as JSON instead of the transformed image."""
        self._operations["metadata_only"] = bool(metadata_only)

    @property
    def filters(self) -> List[str]:
        """Rendered filter invocations in call order."""
        return [
            f"{name}({','.join(format_filter_arg(arg) for arg in args)})"
            for name, args in self._filters
        ]

    def to_list(self) -> List[str]:
        """Get the ordered, non-empty tokens of the command segment."""
        operations = self._operations
        tokens = []

        if operations.get("metadata_only"):
            tokens.append("meta")

        if "trim" in operations:
            tokens.append(operations["trim"])

        if "crop" in operations:
            tokens.append(operations["crop"])

        if "dimensions" in operations:
            fit_in, width, height = operations["dimensions"]
            if fit_in:
                tokens.append("fit-in")
            tokens.append(f"{width}x{height}")

        for alignment in ("halign", "valign"):
            if operations.get(alignment):
                tokens.append(operations[alignment])

        if operations.get("smart_crop"):
            tokens.append("smart")

        if self._filters:
            tokens.append("filters:" + ":".join(self.filters))

        return tokens

    def serialize(self) -> str:
        """Get the command segment, or an empty string when nothing is set."""
        return "/".join(self.to_list())

    def __copy__(self) -> "CommandSet":
        # Copies never share storage with the source
        clone = CommandSet()
        clone._operations = dict(self._operations)
        clone._filters = list(self._filters)
        return clone

    def copy(self) -> "CommandSet":
        return self.__copy__()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandSet):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"CommandSet({self.serialize()!r})"

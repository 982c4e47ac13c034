"""
Encode nested parameters as an application/x-www-form-urlencoded string.

Mappings become ``key[nested]=value`` pairs, lists and tuples become repeated
``key[]=value`` pairs. Booleans are sent as ``1``/``0`` and everything else
with ``str()``.
"""

import logging
import urllib.parse
from collections.abc import Mapping
from typing import Any, List, Optional, Set, Tuple

from .errors import CycleError, DepthError, EscapeError

Pair = Tuple[str, str]

DEFAULT_MAX_DEPTH = 32

# Each level of nesting costs a stack frame, so stay well below the
# interpreter recursion limit.
MAX_DEPTH_LIMIT = 500

# RFC 3986 reserved characters are all escaped, except "?" and "/" which a
# query may contain (section 3.4). urllib.parse.quote always keeps letters,
# digits and "_.-~".
SAFE_CHARS = "/?"


class FormEncoder:
    max_depth = DEFAULT_MAX_DEPTH
    sort_nested_keys = True
    logger: logging.Logger

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        sort_nested_keys: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, "
                f"not {max_depth}"
            )
        self.max_depth = max_depth
        self.sort_nested_keys = sort_nested_keys
        if logger is not None:
            self.logger = logger
        else:
            self.logger = logging.getLogger("FormEncoder")
            if self.logger.level == logging.NOTSET:
                self.logger.setLevel(logging.INFO)

    def __repr__(self) -> str:
        return (
            f"FormEncoder(max_depth={self.max_depth}, "
            f"sort_nested_keys={self.sort_nested_keys})"
        )

    def encode(self, parameters: Mapping) -> str:
        """
        Encode a mapping of parameters. Top-level keys are sorted.
        """
        components: List[Pair] = []
        for key in sorted(parameters.keys(), key=str):
            components += self.pairs(str(key), parameters[key])
        self.logger.debug(
            "Encoded %d top-level keys into %d pairs",
            len(parameters),
            len(components),
        )
        return self.encode_pairs(components)

    def encode_pairs(self, components: List[Pair]) -> str:
        """
        Escape and join pairs that have already been flattened, in order.
        """
        return "&".join(
            f"{self.escape(key)}={self.escape(val)}" for key, val in components
        )

    def pairs(self, key: str, val: Any) -> List[Pair]:
        """
        Flatten one key and its value into unescaped (key, value) pairs.
        """
        try:
            return self._pairs(key, val, 0, set())
        except RecursionError as err:
            # the caller was already deep in the stack
            raise DepthError(key, self.max_depth) from err

    def _pairs(
        self, key: str, val: Any, depth: int, seen: Set[int]
    ) -> List[Pair]:
        if isinstance(val, Mapping):
            items = list(val.items())
            if self.sort_nested_keys:
                items.sort(key=lambda item: str(item[0]))
            with _Visit(key, val, depth + 1, self.max_depth, seen):
                components: List[Pair] = []
                for nestedkey, nestedval in items:
                    components += self._pairs(
                        f"{key}[{nestedkey}]", nestedval, depth + 1, seen
                    )
                return components
        if isinstance(val, (list, tuple)):
            with _Visit(key, val, depth + 1, self.max_depth, seen):
                components = []
                for item in val:
                    components += self._pairs(
                        f"{key}[]", item, depth + 1, seen
                    )
                return components
        if isinstance(val, bool):
            return [(key, "1" if val else "0")]
        return [(key, str(val))]

    def escape(self, text: str) -> str:
        return escape(text)


class _Visit:
    """
    Track a container while its contents are being flattened.
    """

    def __init__(
        self, key: str, val: Any, depth: int, max_depth: int, seen: Set[int]
    ):
        if depth > max_depth:
            raise DepthError(key, max_depth)
        if id(val) in seen:
            raise CycleError(key)
        self.ident = id(val)
        self.seen = seen

    def __enter__(self) -> "_Visit":
        self.seen.add(self.ident)
        return self

    def __exit__(self, *exc_info) -> None:
        self.seen.discard(self.ident)


def escape(text: str) -> str:
    """
    Percent-encode a query string key or value.

    Everything except ASCII letters, digits and ``-._~/?`` is written as
    ``%XX`` per UTF-8 byte.

    :raises EscapeError: if the text cannot be encoded as UTF-8
    """
    try:
        return urllib.parse.quote(text, safe=SAFE_CHARS, errors="strict")
    except UnicodeEncodeError as err:
        raise EscapeError(text) from err


_default = FormEncoder()


def encode(parameters: Mapping) -> str:
    return _default.encode(parameters)


def pairs(key: str, val: Any) -> List[Pair]:
    return _default.pairs(key, val)

"""
Generic URL parsing and serialization shared by all normalizers.

Examples:
    "s3://bucket/prefix?region=x" -> Locator("s3", "bucket", "/prefix", {"region": "x"})
    "./data"                      -> Locator("", "", "./data")
    "mem"                         -> Locator("", "", "mem")
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from .errors import MalformedLocatorError

# Characters left unescaped in a serialized path, besides letters, digits and "_.-~".
PATH_SAFE_CHARS = "/$&+,:;=@"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Locator:
    """Structured form of a resource URL.

    Attributes:
        scheme: Lower-cased scheme token, empty for bare paths.
        authority: Host part (bucket, table, project, database...), kept raw.
        path: Percent-decoded path.
        query: Query parameters, last value wins.
        fragment: Raw fragment, carried only so serialization round-trips.
        raw_path: Path exactly as written in the source URL.
        raw_query: Query string exactly as written in the source URL.

    The raw forms are written back only while they still decode to path and
    query, so a handler that rewrites either part gets it re-encoded and
    everything it left alone keeps its source bytes.
    """

    scheme: str = ""
    authority: str = ""
    path: str = ""
    query: Dict[str, str] = field(default_factory=dict)
    fragment: str = ""
    raw_path: Optional[str] = field(default=None, compare=False, repr=False)
    raw_query: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def segments(self) -> List[str]:
        """Path split on "/", keeping the leading empty segment of an absolute path."""
        return self.path.split("/")

    def with_query(self, **params: str) -> "Locator":
        """Return a copy with params merged over the existing query."""
        merged = dict(self.query)
        merged.update(params)
        return replace(self, query=merged)

    def without_query(self, *keys: str) -> "Locator":
        """Return a copy with the given query keys removed."""
        return replace(self, query={k: v for k, v in self.query.items() if k not in keys})

    def escaped_path(self) -> str:
        if self.raw_path is not None and unquote(self.raw_path) == self.path:
            return self.raw_path
        return quote(self.path, safe=PATH_SAFE_CHARS)

    def encoded_query(self) -> str:
        if self.raw_query is not None and _parse_query(self.raw_query) == self.query:
            return self.raw_query
        return urlencode(sorted(self.query.items()))

    def to_url(self) -> str:
        """Serialize back to a URL string; a rewritten query is written with keys sorted."""
        parts = []
        if self.scheme:
            parts.append(f"{self.scheme}:")
        if self.authority or self.path.startswith("/"):
            parts.append("//")
            parts.append(self.authority)
            if self.authority and self.path and not self.path.startswith("/"):
                parts.append("/")
        parts.append(self.escaped_path())
        query = self.encoded_query()
        if query:
            parts.append("?")
            parts.append(query)
        if self.fragment:
            parts.append(f"#{self.fragment}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_url()


def parse_locator(raw: str) -> Locator:
    """Parse a URL or bare path into a Locator.

    Args:
        raw: URL string, bare filesystem path, or the bare token "mem".

    Returns:
        Parsed Locator.

    Raises:
        MalformedLocatorError: If the string is empty, contains control
            characters or invalid percent escapes, or cannot be split.
    """
    if not raw:
        raise MalformedLocatorError("URL is empty", raw)
    if _CONTROL_CHARS.search(raw):
        raise MalformedLocatorError("URL contains control characters", raw)
    if _BAD_ESCAPE.search(raw):
        raise MalformedLocatorError("URL contains an invalid percent escape", raw)

    try:
        split = urlsplit(raw)
    except ValueError as e:
        raise MalformedLocatorError(f"Failed to parse URL ({e})", raw)

    return Locator(
        scheme=split.scheme,
        authority=split.netloc,
        path=unquote(split.path),
        query=_parse_query(split.query),
        fragment=split.fragment,
        raw_path=split.path,
        raw_query=split.query,
    )


def _parse_query(raw_query: str) -> Dict[str, str]:
    return dict(parse_qsl(raw_query, keep_blank_values=True))


def join_path(*segments: str) -> str:
    """Join segments into an absolute path, dropping empty segments."""
    return "/" + "/".join(s.strip("/") for s in segments if s.strip("/"))

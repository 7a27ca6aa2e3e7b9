"""CanonicalUri and QueryString models for outgoing resource requests.

A ``CanonicalUri`` is the normalized representation of a resource location:
an absolute path plus an optional, ordered query string. The path never
carries query parameters; those always live in the ``QueryString``.

Example:
    ```python
    query = QueryString({"limit": 25})
    uri = CanonicalUri(absolute_path="/apiKeys", query=query)

    query.update({"encryptSecret": True})
    uri.to_string()  # "/apiKeys?limit=25&encryptSecret=true"
    ```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any
from urllib.parse import parse_qsl, quote

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, field_validator
from pydantic_core import core_schema


def to_query_value(value: Any) -> str:
    """Convert a Python value into its query-string wire form.

    Booleans are rendered lowercase (``true``/``false``) so that the remote
    service can parse them; everything else uses ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryString(MutableMapping[str, str]):
    """Ordered, case-sensitive ``str -> str`` mapping of query parameters.

    Keys are unique. Assigning an existing key overwrites its value in place
    and keeps its original position. A QueryString is created per request and
    must not be shared across requests.
    """

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self._params: dict[str, str] = {}
        if params:
            self.update(params)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError(f"Query parameter name must be a non-empty string, got {key!r}")
        self._params[key] = to_query_value(value)

    def __delitem__(self, key: str) -> None:
        del self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryString):
            return list(self._params.items()) == list(other._params.items())
        if isinstance(other, Mapping):
            return self._params == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"QueryString({self._params!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Models must hold the caller's instance, never a validated copy.
        return core_schema.is_instance_schema(cls)

    def put_all(self, other: Mapping[str, Any]) -> None:
        """Merge ``other`` into this query string, overwriting on collision."""
        self.update(other)

    def is_empty(self) -> bool:
        """Return True when no parameters are set."""
        return not self._params

    def copy(self) -> QueryString:
        """Return a shallow copy preserving parameter order."""
        return QueryString(self._params)

    def to_query(self) -> str:
        """Render the URL-encoded ``k=v&k2=v2`` form in insertion order."""
        return "&".join(
            f"{quote(key, safe='')}={quote(value, safe='')}"
            for key, value in self._params.items()
        )

    @classmethod
    def parse(cls, text: str | None) -> QueryString:
        """Parse a raw query string (with or without a leading ``?``)."""
        if not text:
            return cls()
        return cls(dict(parse_qsl(text.lstrip("?"), keep_blank_values=True)))


class CanonicalUri(BaseModel):
    """Resource path plus optional query.

    The model itself is frozen; the ``QueryString`` it holds stays mutable so
    filters may add parameters in place. When no query object exists, a new
    ``CanonicalUri`` has to be created instead.
    """

    absolute_path: str = Field(
        ...,
        description="Absolute resource path or href, without query parameters",
        min_length=1,
    )
    query: QueryString | None = Field(
        default=None,
        description="Query parameters sent with the request, if any",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("absolute_path")
    @classmethod
    def validate_absolute_path(cls, v: str) -> str:
        """Reject paths that smuggle in query parameters."""
        if "?" in v:
            raise ValueError("absolute_path must not contain query parameters")
        return v

    @classmethod
    def parse(cls, href: str) -> CanonicalUri:
        """Split an href such as ``/apiKeys?limit=10`` into path and query."""
        path, _, raw_query = href.partition("?")
        return cls(absolute_path=path, query=QueryString.parse(raw_query) if raw_query else None)

    def has_query(self) -> bool:
        """Return True when a non-empty query is present."""
        return self.query is not None and not self.query.is_empty()

    def to_string(self) -> str:
        """Render path and query as a single href."""
        if self.query is None or self.query.is_empty():
            return self.absolute_path
        return f"{self.absolute_path}?{self.query.to_query()}"

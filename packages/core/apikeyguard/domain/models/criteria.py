"""Equality criteria used to shape ApiKey queries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apikeyguard.domain.models.api_key_parameter import (
    DEFAULT_ENCRYPTION_ITERATIONS,
    DEFAULT_ENCRYPTION_SIZE,
)


class EqualsExpression(BaseModel):
    """A single ``name == value`` constraint."""

    name: str = Field(..., description="Query parameter / attribute name", min_length=1)
    value: Any = Field(..., description="Expected value")

    model_config = ConfigDict(frozen=True)


class EqualsExpressionFactory:
    """Builds equality expressions for one attribute.

    Example:
        ```python
        EqualsExpressionFactory("encryptSecret").eq(True)
        ```
    """

    def __init__(self, name: str) -> None:
        self._name = name

    def eq(self, value: Any) -> EqualsExpression:
        """Return an expression requiring the attribute to equal ``value``."""
        if value is None:
            raise ValueError(f"Value for '{self._name}' cannot be None")
        return EqualsExpression(name=self._name, value=value)


class ApiKeyCriteria:
    """Ordered set of equality expressions plus optional pagination.

    Expressions keep the order in which they were added; serializing the same
    expressions twice yields the same query string.
    """

    DEFAULT_ENCRYPTION_SIZE = DEFAULT_ENCRYPTION_SIZE
    DEFAULT_ENCRYPTION_ITERATIONS = DEFAULT_ENCRYPTION_ITERATIONS

    def __init__(self) -> None:
        self._expressions: list[EqualsExpression] = []
        self.limit: int | None = None
        self.offset: int | None = None

    def add(self, expression: EqualsExpression) -> ApiKeyCriteria:
        """Append an expression (fluent API)."""
        self._expressions.append(expression)
        return self

    def limit_to(self, limit: int) -> ApiKeyCriteria:
        """Limit the number of collection items returned."""
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        return self

    def offset_by(self, offset: int) -> ApiKeyCriteria:
        """Skip the first ``offset`` collection items."""
        if offset < 0:
            raise ValueError("offset cannot be negative")
        self.offset = offset
        return self

    @property
    def expressions(self) -> list[EqualsExpression]:
        """Expressions in insertion order."""
        return list(self._expressions)

    def is_empty(self) -> bool:
        """Return True when there is nothing to serialize."""
        return not self._expressions and self.limit is None and self.offset is None

    def __iter__(self) -> Iterator[EqualsExpression]:
        return iter(self._expressions)

    def __len__(self) -> int:
        return len(self._expressions)


def build_criteria(constraints: Iterable[tuple[str, Any]]) -> ApiKeyCriteria:
    """Build criteria from ordered ``(attribute_name, expected_value)`` pairs.

    Args:
        constraints: Equality constraints in the order they should serialize.

    Returns:
        ApiKeyCriteria holding one EqualsExpression per constraint.
    """
    criteria = ApiKeyCriteria()
    for name, value in constraints:
        criteria.add(EqualsExpressionFactory(name).eq(value))
    return criteria

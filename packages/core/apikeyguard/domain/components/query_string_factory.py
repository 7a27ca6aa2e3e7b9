"""QueryStringFactory: serializes criteria into query strings."""

from apikeyguard.domain.models.canonical_uri import QueryString
from apikeyguard.domain.models.criteria import ApiKeyCriteria


class QueryStringFactory:
    """Turns ApiKeyCriteria into a new QueryString.

    Expressions are written in the order they were added, followed by
    ``limit`` and ``offset`` when set. If an attribute appears twice the last
    value wins but the first position is kept.
    """

    LIMIT = "limit"
    OFFSET = "offset"

    def create_query_string(self, criteria: ApiKeyCriteria) -> QueryString:
        """Serialize ``criteria``.

        Args:
            criteria: Criteria to serialize.

        Returns:
            A new QueryString owned by the caller.
        """
        query = QueryString()
        for expression in criteria:
            query[expression.name] = expression.value
        if criteria.limit is not None:
            query[self.LIMIT] = criteria.limit
        if criteria.offset is not None:
            query[self.OFFSET] = criteria.offset
        return query

"""Lookup error taxonomy.

RecordNotFound and QueryFailure are raised by the aggregation layer and
collapsed into an empty result by the lookup service. FieldParseError never
leaves a row factory; the affected field degrades to None.
"""


class LookupFailure(Exception):
    """Base class for errors that turn a lookup into 'not found'."""


class RecordNotFound(LookupFailure):
    """No underlying row matches the requested key."""

    def __init__(self, kind: str, key):
        super().__init__(f"{kind} not found: {key!r}")
        self.kind = kind
        self.key = key


class QueryFailure(LookupFailure):
    """The database reported an execution or decode error."""

    def __init__(self, operation: str, cause: Exception | None = None):
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class FieldParseError(ValueError):
    """A single column value could not be parsed into its domain type."""

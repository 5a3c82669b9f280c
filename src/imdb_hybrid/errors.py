from __future__ import annotations


class ImdbHybridError(Exception):
    """Base class for errors surfaced to the caller of the pipeline."""


class CatalogSchemaError(ImdbHybridError, ValueError):
    """Raised when the catalog table lacks the columns the pipeline needs."""


class ClusterConfigError(ImdbHybridError, ValueError):
    """Raised when the requested cluster count cannot be honoured.

    The cluster count is never reduced silently, so cluster ids stay
    comparable between runs.
    """

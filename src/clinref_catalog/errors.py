"""Exception hierarchy used inside the catalog loader.

None of these escape :meth:`CatalogLoader.load` — the loader turns every
failure into a fallback load and records the reason in its status.  They
exist so sources and parsers can tell the loader whether a failure is
worth retrying.
"""


class CatalogError(Exception):
    """Base class for catalog loading failures."""


class SourceUnavailableError(CatalogError):
    """The primary source cannot be read (missing file, HTTP 4xx, ...)."""


class TransientSourceError(SourceUnavailableError):
    """The primary source failed in a way that may succeed on retry."""


class CatalogFormatError(CatalogError):
    """The payload could not be decoded or does not have the expected shape."""


class CatalogIntegrityError(CatalogError):
    """The payload parsed but violates catalog invariants.

    ``errors`` lists every violation found, one message per problem.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = "; ".join(self.errors[:3])
        if len(self.errors) > 3:
            summary += f" (+{len(self.errors) - 3} more)"
        super().__init__(f"catalog integrity check failed: {summary}")

"""
Exceptions raised by the site search system.
"""


class SiteSearchError(Exception):
    """Base class for all site search errors."""


class IOFailure(SiteSearchError):
    """Reading or writing an input file or the index failed."""


class QuerySyntaxError(SiteSearchError):
    """The query string could not be parsed."""

    def __init__(self, query, message):
        super().__init__(f"Could not parse query '{query}': {message}")
        self.query = query


class IndexUnavailableError(SiteSearchError):
    """The index is missing, corrupt, locked or already closed."""


class MalformedRecordError(SiteSearchError):
    """A JSON line is not valid JSON or lacks one of the required keys."""

    def __init__(self, message, source=None, line_number=None):
        location = f"{source}:{line_number}: " if source is not None else ''
        super().__init__(f"{location}{message}")
        self.source = source
        self.line_number = line_number

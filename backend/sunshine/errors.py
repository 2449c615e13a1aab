class SunshineError(Exception):
    """Base class for directory errors."""


class StartupFatal(SunshineError):
    """The directory cannot be served at all; startup must abort."""


class DatasetError(StartupFatal):
    pass


class IndexBuildError(StartupFatal):
    pass


class InvalidArgument(SunshineError, ValueError):
    pass


class NotFound(SunshineError, LookupError):
    pass


class BadQuery(SunshineError):
    """The match engine rejected the query expression."""


class InternalIndexError(SunshineError):
    """Query execution against a built index failed."""


class SearchUnavailable(SunshineError):
    """Generic search failure reported to callers in place of index errors."""

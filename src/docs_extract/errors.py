"""Exceptions raised by the documentation extractor."""


class ExtractionError(RuntimeError):
    """A fatal error that stops the extraction run."""


class NavigationError(ExtractionError):
    """The navigation config could not be loaded."""

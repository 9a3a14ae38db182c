"""Exceptions raised by the extraction pipeline."""

from pathlib import Path


class DocBuilderError(Exception):
    """Base class for all api-doc-builder errors."""


class InputMissing(DocBuilderError):
    """The source document cannot be located or read."""

    def __init__(self, path: Path, detail: str = "file not found"):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class ParseError(DocBuilderError):
    """The document is unusable as an API description."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

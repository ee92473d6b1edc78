"""Exception types raised by content validation, resolution and the admin write path."""

from __future__ import annotations


class ContentError(Exception):
    """Base class for all content errors."""


class InvalidContentError(ContentError):
    """A document failed structural validation and cannot be served."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnknownLevelIdError(ContentError):
    """A results pack level id is neither canonical nor a known alias."""

    def __init__(self, level_id: str, version: str) -> None:
        super().__init__(
            f'Unable to normalize levelId "{level_id}" for resultsVersion "{version}". '
            "Expected level1-level4 or a configured level alias."
        )
        self.level_id = level_id


class ContentResolutionError(ContentError):
    """Every resolution step missed, including the bundled file fallback."""


class ContentNotFoundError(ContentResolutionError):
    """The identity does not exist in the CMS and no bundled file covers it."""


class ContentNotPublishedError(ContentResolutionError):
    """The identity exists in the CMS but no usable revision could be served."""


class RevisionError(ContentError):
    """Base class for admin write-path failures."""


class RevisionNotFoundError(RevisionError):
    """A revision or identity referenced by an admin action does not exist."""


class ContentValidationError(RevisionError):
    """Content submitted through the admin write path failed validation."""

    def __init__(self, message: str, errors: list[str], warnings: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors
        self.warnings = warnings or []

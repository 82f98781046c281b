"""Custom exceptions for WebLearn."""


class WebLearnError(Exception):
    """Base exception for WebLearn errors."""
    pass


class UnknownCategoryError(WebLearnError):
    """Requested quiz category is not in the question bank."""

    def __init__(self, category: str):
        super().__init__(f"Unknown quiz category: {category!r}")
        self.category = category


class StorageError(WebLearnError):
    """Key-value backend could not complete a read or write."""
    pass


class PreviewError(WebLearnError):
    """Submitted code could not be composed into a preview document."""
    pass

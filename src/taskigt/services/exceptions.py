"""Custom exceptions for Taskigt services."""


class StorageError(Exception):
    """Raised when a document cannot be saved to or restored from the store.

    Attributes:
        title: Title of the document involved
        message: Human-readable error message
    """

    def __init__(self, title: str, message: str = "Document storage failed"):
        """Initialize StorageError.

        Args:
            title: Title of the document involved
            message: Human-readable error message
        """
        self.title = title
        self.message = message
        super().__init__(f"{message}: {title}")


class DocumentNotFoundError(StorageError):
    """Raised when restoring a title that was never saved."""

    def __init__(self, title: str, message: str = "No saved document with title"):
        super().__init__(title, message)

"""Custom vaguefinder exceptions."""


class VagueFinderError(Exception):
    """Base exception for vaguefinder errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ModelNotLoadedError(VagueFinderError):
    """Exception raised when a comparison is attempted before load_model().

    The embedding model is loaded lazily and explicitly; every comparison
    method checks for it first.
    """

    def __init__(
        self,
        message: str = "Model has not been loaded, call load_model() first",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)


class ModelLoadError(VagueFinderError):
    """Exception raised when the embedding model cannot be instantiated.

    This typically occurs when:
    - The model name does not exist on the hub or on disk
    - Weights are not cached and the hub is unreachable
    - The model produces embeddings of an unexpected dimension
    """

    pass


class MalformedCacheEntryError(VagueFinderError):
    """Exception raised when a cached entry lacks its sentence text."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.index = index

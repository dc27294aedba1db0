class MediaCullError(Exception):
    """Base class for errors raised by mediacull."""


class BackendError(MediaCullError):
    """A backend answered, but reported that the call failed."""
    
    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


class WatchHistoryError(MediaCullError):
    """A history record could not be turned into a watch entry."""
    
    def __init__(self, rating_key: str, message: str):
        self.rating_key = rating_key
        super().__init__(f"{message} (rating key {rating_key})")


class InvalidSortingOption(MediaCullError, ValueError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"'{code}' is not a valid sorting option")

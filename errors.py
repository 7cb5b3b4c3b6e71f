# errors.py


class TrackerError(Exception):
    """Base error for a failed lookup. The message is shown to the user as-is."""

    status_code = 502

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidQueryError(TrackerError):
    status_code = 400


class ResolutionError(TrackerError):
    pass


class GeolocationError(TrackerError):
    pass

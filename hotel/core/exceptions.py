class HotelError(Exception):
    """Base class for rejected operations. `message` is shown to the caller."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(HotelError):
    status_code = 404


class ValidationError(HotelError):
    status_code = 400


class ConflictError(HotelError):
    status_code = 409


class IllegalTransitionError(ConflictError):
    pass

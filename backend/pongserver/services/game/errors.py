class RoomError(Exception):
    """Recoverable lobby error, reported to the originating client as text."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class RoomNotFound(RoomError):
    def __init__(self, message='Room not found'):
        super().__init__(message)


class RoomFull(RoomError):
    def __init__(self, message='Room is full'):
        super().__init__(message)


class NotApplicable(RoomError):
    pass

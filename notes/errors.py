# notes/errors.py


class MelodyError(ValueError):
    """Base class for melody input validation errors."""


class UnknownPitch(MelodyError):
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Unknown pitch: {identifier!r}")


class InvalidDuration(MelodyError):
    def __init__(self, value, index=None):
        self.value = value
        self.index = index
        where = f" (event {index})" if index is not None else ""
        super().__init__(f"Invalid duration{where}: {value!r}, must be a positive finite number")


class MalformedEvent(MelodyError):
    def __init__(self, item, index=None):
        self.item = item
        self.index = index
        where = f" {index}" if index is not None else ""
        super().__init__(f"Melody event{where} must be a (pitch, beats) pair, got {item!r}")

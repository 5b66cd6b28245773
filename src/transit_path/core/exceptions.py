"""Custom exceptions for transit path search."""


class TransitPathError(Exception):
    """Base exception for transit path errors."""

    pass


class StationNotFoundError(TransitPathError):
    """Raised when a station name does not exist in the network."""

    def __init__(self, station: str):
        self.station = station
        super().__init__(f"Station not found: {station}")


class UnreachableError(TransitPathError):
    """Raised when no route connects two stations."""

    def __init__(self, from_station: str, to_station: str):
        self.from_station = from_station
        self.to_station = to_station
        super().__init__(f"No route from {from_station} to {to_station}")


class MalformedInputError(TransitPathError):
    """Raised when a station file cannot be parsed."""

    def __init__(
        self, message: str, path: str | None = None, line_number: int | None = None
    ):
        self.path = path
        self.line_number = line_number
        location = ""
        if path is not None and line_number is not None:
            location = f"{path}:{line_number}: "
        elif path is not None:
            location = f"{path}: "
        elif line_number is not None:
            location = f"line {line_number}: "
        super().__init__(f"{location}{message}")


class ValidationError(TransitPathError):
    """Raised when input validation fails."""

    pass


class DuplicateStationError(ValidationError):
    """Raised when a station name is inserted twice."""

    def __init__(self, station: str):
        self.station = station
        super().__init__(f"Station already exists: {station}")

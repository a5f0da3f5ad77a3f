"""Exception hierarchy for Rasterclip."""


class RasterClipError(Exception):
    """Base exception for all Rasterclip errors."""

    pass


class PreconditionError(RasterClipError):
    """Input rejected before any algorithm was dispatched."""

    pass


class NonFiniteCoordinateError(PreconditionError):
    """A coordinate is NaN or infinite."""

    def __init__(self, name: str, value: float) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Coordinate '{name}' must be finite, got {value!r}")


class DegenerateSegmentError(PreconditionError):
    """Zero-length segment given to an algorithm that needs a direction."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Algorithm '{algorithm}' requires a non-degenerate segment")


class InvalidRadiusError(PreconditionError):
    """Circle radius is negative or not an integer."""

    def __init__(self, radius: object) -> None:
        self.radius = radius
        super().__init__(f"Radius must be a non-negative integer, got {radius!r}")


class InvalidBoundaryError(PreconditionError):
    """Clip window or polygon violates its invariants."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid clip boundary: {reason}")


class PrimitiveTypeError(PreconditionError):
    """Primitive does not match what the selected algorithm draws."""

    def __init__(self, algorithm: str, expected: str, actual: object) -> None:
        self.algorithm = algorithm
        self.expected = expected
        super().__init__(
            f"Algorithm '{algorithm}' expects a {expected}, got {type(actual).__name__}"
        )


class UnknownAlgorithmError(PreconditionError):
    """Requested rasterization algorithm does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown rasterization algorithm '{name}'")


class GeometryFileError(RasterClipError):
    """Errors related to geometry file loading or saving."""

    pass


class GeometryParseError(GeometryFileError):
    """Geometry text is malformed or truncated."""

    def __init__(self, line_number: int | None, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Failed to parse geometry{where}: {reason}")


class GeometryLoadError(GeometryFileError):
    """Error loading a geometry file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load geometry '{path}': {reason}")


class GeometrySaveError(GeometryFileError):
    """Error saving a geometry file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save geometry '{path}': {reason}")

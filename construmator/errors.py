"""Errors raised by the editor core. The Qt layer shows them, the core never does."""


class ConstrumatorError(Exception):
    """Base class; every failure here is local and recoverable."""


class ValidationError(ConstrumatorError):
    pass


class OccupiedCellError(ConstrumatorError):
    def __init__(self, x: int, y: int, floor: int):
        super().__init__(f"Block already exists at ({x}, {y}) on floor {floor}")
        self.x, self.y, self.floor = x, y, floor


class OutOfBoundsError(ConstrumatorError):
    def __init__(self, x: float, y: float):
        super().__init__(f"({x:g}, {y:g}) is outside the canvas")
        self.x, self.y = x, y


class NotAuthenticatedError(ConstrumatorError):
    pass


class NotFoundError(ConstrumatorError):
    pass


class EmptyProjectError(ConstrumatorError):
    pass


class StorageError(ConstrumatorError):
    pass

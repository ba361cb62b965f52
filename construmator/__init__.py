from .errors import (ConstrumatorError, ValidationError, OccupiedCellError, OutOfBoundsError,
                     NotAuthenticatedError, NotFoundError, EmptyProjectError, StorageError)
from .models import MaterialType, Floor, Mode, PlacedBlock, BuildStats, Project, User
from .camera import Camera
from .engine import PlacementEngine
from .floors import FloorLayers
from .stats import compute_stats
from .session import EditorSession
from .store import ProjectStore
from .persistence import ProjectPersistence
from .auth import LocalAuth

__all__ = [
    "ConstrumatorError", "ValidationError", "OccupiedCellError", "OutOfBoundsError",
    "NotAuthenticatedError", "NotFoundError", "EmptyProjectError", "StorageError",
    "MaterialType", "Floor", "Mode", "PlacedBlock", "BuildStats", "Project", "User",
    "Camera", "PlacementEngine", "FloorLayers", "compute_stats", "EditorSession",
    "ProjectStore", "ProjectPersistence", "LocalAuth",
]

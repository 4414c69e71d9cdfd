from enum import Enum, auto


class ProjectionMode(Enum):
    ORTHOGRAPHIC = "orthographic"
    PERSPECTIVE = "perspective"


class ScaleKind(Enum):
    LINEAR = "linear"
    LOG = "log"


class DiagnosticKind(Enum):
    PERSPECTIVE_APPROXIMATED = auto()
    EXTRA_ARGUMENTS_IGNORED = auto()

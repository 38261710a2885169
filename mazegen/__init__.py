"""
mazegen: random grid maze generation with solvability validation.

Five construction algorithms share one odd-dimension grid model. Every grid
is validated with a breadth-first reachability check before it is returned,
and failed attempts are regenerated under a retry/escalation policy.

Examples
--------
>>> from mazegen import generate, MazeAlgorithm
>>> maze = generate(21, seed=7, algorithm=MazeAlgorithm.KRUSKAL)
>>> maze.entrance
(1, 1)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mazegen")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .algorithms import MazeAlgorithm, carve, erase_loops  # noqa: E402
from .config import MazeConfig, next_seed  # noqa: E402
from .controller import (  # noqa: E402
    EscalationAction,
    EscalationContext,
    EscalationDecision,
    GeneratedMaze,
    GenerationState,
    RegenerationController,
    generate,
    make_operator,
)
from .core import ENTRANCE, CellState, Grid  # noqa: E402
from .placement import place_bonuses, place_exit  # noqa: E402
from .utils import (  # noqa: E402
    AllocationError,
    ConfigurationError,
    GenerationAborted,
    MazeGenerationError,
    UnreachableExitError,
    configure_logging,
    get_logger,
)
from .validation import is_exit_reachable, verify_perfect_maze  # noqa: E402

__all__ = [
    "ENTRANCE",
    "AllocationError",
    "CellState",
    "ConfigurationError",
    "EscalationAction",
    "EscalationContext",
    "EscalationDecision",
    "GeneratedMaze",
    "GenerationAborted",
    "GenerationState",
    "Grid",
    "MazeAlgorithm",
    "MazeConfig",
    "MazeGenerationError",
    "RegenerationController",
    "UnreachableExitError",
    "__version__",
    "carve",
    "configure_logging",
    "erase_loops",
    "generate",
    "get_logger",
    "is_exit_reachable",
    "make_operator",
    "next_seed",
    "place_bonuses",
    "place_exit",
    "verify_perfect_maze",
]

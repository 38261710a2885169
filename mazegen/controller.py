"""
Regeneration controller: generate, validate, retry, escalate.

Each attempt allocates a fresh grid, carves it with the selected algorithm,
places the exit (and bonus cells) and runs the reachability check. A failed
attempt drops its grid and is retried with the next seed. After
``max_auto_retries`` consecutive failures the operator callback decides
whether to retry with a new seed, switch algorithm or abort.

State machine::

    IDLE -> GENERATING -> VALIDATING -> SUCCEEDED
                 ^             |
                 |             v
                 +------- FAILED_RETRY -> FAILED_ESCALATE -> ABORTED
                 |                              |
                 +------------------------------+

The operator callback is the only point where the flow blocks on an external
decision, and the only point where a run can be cancelled.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from mazegen.algorithms import MazeAlgorithm, carve
from mazegen.config import MazeConfig, next_seed
from mazegen.core.grid import DEFAULT_SIZE, ENTRANCE, CellState, Coordinate, Grid
from mazegen.placement import place_bonuses, place_exit
from mazegen.utils.exceptions import ConfigurationError, GenerationAborted, UnreachableExitError
from mazegen.utils.logging import LoggedOperation, get_logger, log_attempt_result, log_generation_start
from mazegen.validation import is_exit_reachable

logger = get_logger(__name__)


class GenerationState(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    VALIDATING = "validating"
    SUCCEEDED = "succeeded"
    FAILED_RETRY = "failed_retry"
    FAILED_ESCALATE = "failed_escalate"
    ABORTED = "aborted"


class EscalationAction(Enum):
    RETRY = "retry"
    CHANGE_ALGORITHM = "change_algorithm"
    ABORT = "abort"


@dataclass(frozen=True)
class EscalationDecision:
    """Operator answer at the escalation point."""

    action: EscalationAction
    algorithm: MazeAlgorithm | None = None

    def __post_init__(self):
        if self.action == EscalationAction.CHANGE_ALGORITHM and self.algorithm is None:
            raise ValueError("CHANGE_ALGORITHM decision requires an algorithm")

    @classmethod
    def retry(cls) -> EscalationDecision:
        return cls(EscalationAction.RETRY)

    @classmethod
    def change_algorithm(cls, algorithm: MazeAlgorithm | str) -> EscalationDecision:
        return cls(EscalationAction.CHANGE_ALGORITHM, MazeAlgorithm.parse(algorithm))

    @classmethod
    def abort(cls) -> EscalationDecision:
        return cls(EscalationAction.ABORT)


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome of one attempt. Grids are never kept in the history."""

    attempt: int
    seed: int
    algorithm: MazeAlgorithm
    exit_cell: Coordinate
    reachable: bool


@dataclass(frozen=True)
class EscalationContext:
    """What the operator sees when automatic retries are exhausted."""

    size: int
    seed: int
    algorithm: MazeAlgorithm
    failures: int
    escalations: int
    history: tuple[AttemptRecord, ...]


@dataclass
class GeneratedMaze:
    """A validated maze handed to the consumer."""

    grid: Grid
    entrance: Coordinate
    exit_cell: Coordinate
    seed: int
    algorithm: MazeAlgorithm
    attempts: int
    bonuses: int = 0
    history: tuple[AttemptRecord, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return self.grid.size

    def get(self, row: int, col: int) -> CellState:
        return self.grid.get(row, col)


Operator = Callable[[EscalationContext], EscalationDecision]
Validator = Callable[[Grid, Coordinate, Coordinate], bool]


def abort_operator(context: EscalationContext) -> EscalationDecision:
    """Default operator: give up at the first escalation."""
    return EscalationDecision.abort()


def make_operator(
    action: EscalationAction | str,
    algorithm: MazeAlgorithm | str | None = None,
    max_escalations: int = 3,
) -> Operator:
    """
    Build a non-interactive operator that always answers ``action``.

    After ``max_escalations`` answers it aborts, so a systematically failing
    configuration still terminates.
    """
    action = EscalationAction(action)
    if action == EscalationAction.CHANGE_ALGORITHM:
        decision = EscalationDecision.change_algorithm(algorithm if algorithm is not None else MazeAlgorithm.PRIM)
    else:
        decision = EscalationDecision(action)

    def operator(context: EscalationContext) -> EscalationDecision:
        if context.escalations > max_escalations:
            return EscalationDecision.abort()
        return decision

    return operator


class RegenerationController:
    """
    Runs generation attempts until one validates or the operator aborts.

    A controller is single-use: :meth:`run` may be called once.
    """

    def __init__(
        self,
        config: MazeConfig,
        operator: Operator | None = None,
        validator: Validator | None = None,
    ):
        """
        Args:
            config: Validated generation parameters
            operator: Escalation callback (default aborts)
            validator: Reachability check (default breadth-first search)
        """
        self.config = config
        self.operator = operator or abort_operator
        self.validator = validator or is_exit_reachable
        self.state = GenerationState.IDLE
        self.transitions: list[tuple[GenerationState, GenerationState]] = []
        self.history: list[AttemptRecord] = []
        self.failures = 0
        self.escalations = 0

    def _transition(self, new_state: GenerationState) -> None:
        self.transitions.append((self.state, new_state))
        logger.debug(f"State {self.state.value} -> {new_state.value}")
        self.state = new_state

    def run(self) -> GeneratedMaze:
        """
        Generate a validated maze.

        Raises:
            GenerationAborted: The operator chose to abort
            AllocationError: A grid could not be allocated
        """
        if self.state != GenerationState.IDLE:
            raise RuntimeError(f"Controller already ran (state: {self.state.value})")

        seed = self.config.resolved_seed()
        algorithm = self.config.algorithm
        log_generation_start(logger, algorithm.label, self.config.to_dict())

        while True:
            self._transition(GenerationState.GENERATING)
            try:
                maze = self._attempt(seed, algorithm)
            except UnreachableExitError:
                seed, algorithm = self._handle_failure(seed, algorithm)
                continue

            self._transition(GenerationState.SUCCEEDED)
            return maze

    def _attempt(self, seed: int, algorithm: MazeAlgorithm) -> GeneratedMaze:
        """Generate and validate one grid; every structure here is local to the attempt."""
        attempt = len(self.history) + 1
        rng = random.Random(seed)

        with LoggedOperation(logger, f"attempt {attempt} ({algorithm.label}, seed {seed})", logging.DEBUG):
            grid = Grid.create(self.config.size)
            carve(grid, algorithm, rng, ENTRANCE, loop_probability=self.config.loop_probability)
            exit_cell = place_exit(grid)
            bonuses = 0
            if self.config.place_bonuses:
                bonuses = place_bonuses(grid, rng, exit_cell, count=self.config.bonus_count)

        self._transition(GenerationState.VALIDATING)
        reachable = bool(self.validator(grid, exit_cell, ENTRANCE))
        self.history.append(AttemptRecord(attempt, seed, algorithm, exit_cell, reachable))

        if not reachable:
            self.failures += 1
            log_attempt_result(logger, attempt, seed, False, self.failures, self.config.max_auto_retries)
            raise UnreachableExitError(ENTRANCE, exit_cell, seed, algorithm.value, attempt=attempt)

        log_attempt_result(logger, attempt, seed, True, self.failures, self.config.max_auto_retries)
        return GeneratedMaze(
            grid=grid,
            entrance=ENTRANCE,
            exit_cell=exit_cell,
            seed=seed,
            algorithm=algorithm,
            attempts=attempt,
            bonuses=bonuses,
            history=tuple(self.history),
        )

    def _handle_failure(self, seed: int, algorithm: MazeAlgorithm) -> tuple[int, MazeAlgorithm]:
        """Decide the seed and algorithm of the next attempt after a failed validation."""
        self._transition(GenerationState.FAILED_RETRY)

        if self.failures < self.config.max_auto_retries:
            return next_seed(seed), algorithm

        self._transition(GenerationState.FAILED_ESCALATE)
        self.escalations += 1
        context = EscalationContext(
            size=self.config.size,
            seed=seed,
            algorithm=algorithm,
            failures=self.failures,
            escalations=self.escalations,
            history=tuple(self.history),
        )
        decision = self.operator(context)
        if not isinstance(decision, EscalationDecision):
            raise TypeError(f"Operator must return an EscalationDecision, got {type(decision).__name__}")

        logger.info(f"Escalation {self.escalations}: operator chose {decision.action.value}")

        if decision.action == EscalationAction.ABORT:
            self._transition(GenerationState.ABORTED)
            logger.error(f"Generation aborted after {len(self.history)} attempts")
            raise GenerationAborted(seed, algorithm.value, self.failures, len(self.history))

        self.failures = 0
        if decision.action == EscalationAction.CHANGE_ALGORITHM:
            # Same seed, new strategy
            assert decision.algorithm is not None
            logger.info(f"Switching algorithm {algorithm.label} -> {decision.algorithm.label}")
            return seed, decision.algorithm

        return next_seed(seed), algorithm


def generate(
    size: int = DEFAULT_SIZE,
    seed: int | None = None,
    algorithm: MazeAlgorithm | str = MazeAlgorithm.PRIM,
    *,
    config: MazeConfig | None = None,
    operator: Operator | None = None,
    validator: Validator | None = None,
) -> GeneratedMaze:
    """
    Generate a validated maze.

    Args:
        size: Odd grid dimension in [5, 51]
        seed: Seed of the first attempt (None picks a time-based seed)
        algorithm: Construction algorithm or its name
        config: Full configuration; overrides size, seed and algorithm
        operator: Escalation callback (default aborts)
        validator: Reachability check (default breadth-first search)

    Returns:
        The validated maze with its entrance and exit

    Raises:
        ConfigurationError: Invalid size, seed or algorithm
        GenerationAborted: The operator aborted after repeated failures
        AllocationError: A grid could not be allocated

    Example:
        >>> maze = generate(21, seed=42, algorithm="wilson")
        >>> maze.grid.size
        21
    """
    if config is None:
        try:
            config = MazeConfig(size=size, seed=seed, algorithm=algorithm)
        except ValidationError as e:
            first = e.errors()[0]
            parameter = str(first["loc"][0]) if first["loc"] else "config"
            raise ConfigurationError(
                parameter_name=parameter,
                provided_value=first.get("input"),
                component="generate",
                reason=first["msg"],
            ) from e

    return RegenerationController(config, operator=operator, validator=validator).run()

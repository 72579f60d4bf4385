"""
Interaction state machine.

Maps raw press / move / release input into semantic outputs.
The transition table is plain data so it can be inspected and tested
directly.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Dict, List, Optional, Tuple

from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


class InteractionState(Enum):
    """
    Interaction states.

    State transitions:
        IDLE -> HOLDING -> DRAGGING -> IDLE
        HOLDING -> IDLE
    """

    IDLE = auto()  # No press in progress
    HOLDING = auto()  # Pressed, not yet moved
    DRAGGING = auto()  # Pressed and moving


class InputKind(Enum):
    PRESS_STARTED = auto()
    PRESS_MOVED = auto()
    PRESS_ENDED = auto()


class OutputKind(Enum):
    START_HOLD = auto()
    MOVE_CURSOR = auto()  # vector = delta
    PERFORM_CLICK = auto()  # vector = release position
    RESET = auto()


@dataclass(frozen=True)
class TouchInput:
    """
    One input to the machine.

    PRESS_STARTED may carry the press origin; moves and releases
    always carry a position.
    """

    kind: InputKind
    position: Optional[PlanarVector] = None

    @classmethod
    def press_started(cls, position: Optional[PlanarVector] = None) -> "TouchInput":
        return cls(InputKind.PRESS_STARTED, position)

    @classmethod
    def press_moved(cls, position: PlanarVector) -> "TouchInput":
        return cls(InputKind.PRESS_MOVED, position)

    @classmethod
    def press_ended(cls, position: PlanarVector) -> "TouchInput":
        return cls(InputKind.PRESS_ENDED, position)


@dataclass(frozen=True)
class MachineOutput:
    kind: OutputKind
    vector: Optional[PlanarVector] = None


# (state, input) -> (next state, output). Pairs not listed are no-ops.
TRANSITION_TABLE: Dict[Tuple[InteractionState, InputKind], Tuple[InteractionState, OutputKind]] = {
    (InteractionState.IDLE, InputKind.PRESS_STARTED): (
        InteractionState.HOLDING,
        OutputKind.START_HOLD,
    ),
    (InteractionState.HOLDING, InputKind.PRESS_MOVED): (
        InteractionState.DRAGGING,
        OutputKind.MOVE_CURSOR,
    ),
    (InteractionState.HOLDING, InputKind.PRESS_ENDED): (
        InteractionState.IDLE,
        OutputKind.PERFORM_CLICK,
    ),
    (InteractionState.DRAGGING, InputKind.PRESS_MOVED): (
        InteractionState.DRAGGING,
        OutputKind.MOVE_CURSOR,
    ),
    (InteractionState.DRAGGING, InputKind.PRESS_ENDED): (
        InteractionState.IDLE,
        OutputKind.RESET,
    ),
}


def is_defined_transition(state: InteractionState, kind: InputKind) -> bool:
    """
    Check if an input has a table entry in a state.

    Args:
        state: Current state
        kind: Input kind

    Returns:
        True if the input changes state or produces output
    """
    return (state, kind) in TRANSITION_TABLE


class TouchpadStateMachine:
    """
    Table-driven touchpad state machine.

    Total: every input is accepted in every state; undefined pairs
    leave the state unchanged and produce no output.
    """

    def __init__(
        self,
        initial_state: InteractionState = InteractionState.IDLE,
        max_history: int = 100,
    ):
        """
        Initialize state machine.

        Args:
            initial_state: Starting state (default: IDLE)
            max_history: Number of visited states to remember
        """
        self._current_state = initial_state
        self._previous_state: Optional[InteractionState] = None
        self._history: Deque[InteractionState] = deque([initial_state], maxlen=max_history)

        # Hold origin, then last seen position while dragging
        self._anchor: Optional[PlanarVector] = None

    @property
    def current_state(self) -> InteractionState:
        return self._current_state

    @property
    def previous_state(self) -> Optional[InteractionState]:
        return self._previous_state

    @property
    def history(self) -> List[InteractionState]:
        """Visited states, oldest first."""
        return list(self._history)

    def process(self, touch: TouchInput) -> Optional[MachineOutput]:
        """
        Feed one input.

        Args:
            touch: Input event

        Returns:
            Output for the transition, or None for ignored inputs
        """
        entry = TRANSITION_TABLE.get((self._current_state, touch.kind))
        if entry is None:
            return None

        next_state, output_kind = entry
        output = self._build_output(output_kind, touch)

        if next_state != self._current_state:
            self._previous_state = self._current_state
            self._current_state = next_state
            self._history.append(next_state)

        if next_state == InteractionState.IDLE:
            self._anchor = None

        return output

    def _build_output(self, kind: OutputKind, touch: TouchInput) -> MachineOutput:
        """Compute the output payload and track the anchor point."""
        if kind == OutputKind.START_HOLD:
            self._anchor = touch.position
            return MachineOutput(kind)

        if kind == OutputKind.MOVE_CURSOR:
            position = touch.position
            # Without a recorded origin the first move is a zero delta
            origin = self._anchor if self._anchor is not None else position
            self._anchor = position
            return MachineOutput(kind, position - origin)

        if kind == OutputKind.PERFORM_CLICK:
            return MachineOutput(kind, touch.position)

        return MachineOutput(kind)

    def reset(self, state: InteractionState = InteractionState.IDLE):
        """Return to a state, discarding history and anchors."""
        self._previous_state = self._current_state
        self._current_state = state
        self._history.clear()
        self._history.append(state)
        self._anchor = None
        logger.debug(f"State machine reset to {state.name}")

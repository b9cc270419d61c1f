from enum import Enum, auto


class DragState(Enum):
    IDLE = auto()
    DRAGGING = auto()


# Result of a pointer-up, reported back to the caller (and the trace stream)
class DropOutcome(Enum):
    COMMITTED = "committed"
    REVERTED = "reverted"
    IGNORED = "ignored"   # pointer-up with no active drag

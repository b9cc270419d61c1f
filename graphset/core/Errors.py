class InvariantViolation(RuntimeError):
    """
    Internal-consistency failure in the placement model.

    Raised when a structural invariant is broken (no open drop zone, an item
    placed twice, a commit whose preconditions do not hold). These indicate
    a bug in the state machine, never a user mistake.
    """


class UnknownItemError(ValueError):
    def __init__(self, item_id: str):
        super().__init__(f"Item '{item_id}' is not in the catalog")
        self.item_id = item_id

import pytest

from graphset.core.Errors import UnknownItemError
from graphset.core.GraphPrimitives import Connection, DropZone, Node, Point
from graphset.core.SessionController import SessionController
from graphset.core.Types import DragState, DropOutcome


def check_invariants(controller):
    snap = controller.snapshot()
    open_zones = [z for z in snap.zones if not z.occupied]
    assert len(snap.nodes) == len(snap.connections) + 1
    assert len(open_zones) == 1 and open_zones[0] == snap.zones[-1]
    assert len(snap.nodes) == len(snap.zones)
    assert len([i for i in snap.items if i.placed]) == len(snap.nodes) - 1
    assert len(controller.registry.placed_items()) == len(snap.nodes) - 1


class TestSessionController:

    def setup_method(self):
        self.controller = SessionController()

    def drag(self, item_id, release_at):
        """Grab the item at its current corner, move it, release it."""
        item = self.controller.registry.get(item_id)
        self.controller.pointer_down(item_id, item.current_position)
        self.controller.pointer_move(release_at)
        return self.controller.pointer_up()

    def test_initial_state(self):
        assert self.controller.state == DragState.IDLE
        assert self.controller.dragging_item_id is None
        check_invariants(self.controller)

    def test_pointer_down_opens_session(self):
        assert self.controller.pointer_down("func1", Point(415, 60)) is True
        assert self.controller.state == DragState.DRAGGING
        assert self.controller.drag_session.pointer_offset == Point(15, 10)

    def test_pointer_move_applies_offset(self):
        self.controller.pointer_down("func1", Point(415, 60))
        self.controller.pointer_move(Point(125, 175))
        assert self.controller.registry.get("func1").current_position == Point(110, 165)

    def test_commit_correctness(self):
        outcome = self.drag("func1", Point(110, 165))

        assert outcome == DropOutcome.COMMITTED
        assert self.controller.state == DragState.IDLE
        snap = self.controller.snapshot()
        assert snap.nodes[-1] == Node(1, Point(100, 160), "Function A", "func1", False)
        assert snap.connections == (Connection(0, 1, "L1"),)
        assert snap.open_zone == DropZone("drop1", 2, Point(100, 250), False)
        check_invariants(self.controller)

    def test_revert_correctness(self):
        outcome = self.drag("func2", Point(300, 400))

        assert outcome == DropOutcome.REVERTED
        assert self.controller.state == DragState.IDLE
        snap = self.controller.snapshot()
        assert len(snap.nodes) == 1
        assert snap.connections == ()
        item = self.controller.registry.get("func2")
        assert item.placed is False
        assert item.current_position == Point(400, 120)
        check_invariants(self.controller)

    def test_placed_item_cannot_be_dragged(self):
        self.drag("func1", Point(100, 160))
        assert self.controller.pointer_down("func1", Point(100, 160)) is False
        assert self.controller.state == DragState.IDLE
        assert self.controller.pointer_up() == DropOutcome.IGNORED

    def test_pointer_down_during_drag_is_ignored(self):
        self.controller.pointer_down("func1", Point(400, 50))
        assert self.controller.pointer_down("func2", Point(400, 120)) is False
        assert self.controller.dragging_item_id == "func1"

        self.controller.pointer_move(Point(100, 160))
        assert self.controller.registry.get("func2").current_position == Point(400, 120)
        assert self.controller.pointer_up() == DropOutcome.COMMITTED
        assert self.controller.builder.last_node().source_item_id == "func1"

    def test_idle_events_are_noops(self):
        self.controller.pointer_move(Point(100, 160))
        assert self.controller.pointer_up() == DropOutcome.IGNORED
        assert self.controller.snapshot().items == self.controller.registry.items()
        assert all(i.current_position == i.origin_position for i in self.controller.registry.items())

    def test_at_most_once_placement(self):
        self.drag("func1", Point(100, 160))
        self.drag("func1", Point(100, 250))
        assert len(self.controller.builder.nodes()) == 2
        assert [n.source_item_id for n in self.controller.builder.nodes()] == [None, "func1"]

    def test_monotonic_growth_and_labels(self):
        counts = []
        for item_id in ["func1", "func2", "func3", "func4"]:
            self.drag(item_id, self.controller.frontier.open_zone().position + Point(5, -5))
            counts.append(len(self.controller.builder.nodes()))
            check_invariants(self.controller)
        assert counts == [2, 3, 4, 5]
        connections = self.controller.builder.connections()
        assert [c.label for c in connections] == ["L1", "L2", "L3", "L4"]
        assert all(c.to_node_id == c.from_node_id + 1 for c in connections)

    def test_missed_drop_does_not_shrink_graph(self):
        self.drag("func1", Point(100, 160))
        self.drag("func2", Point(700, 700))
        assert len(self.controller.builder.nodes()) == 2
        check_invariants(self.controller)

    def test_drop_must_hit_open_zone_not_an_old_one(self):
        self.drag("func1", Point(100, 160))
        # (100,160) is now occupied; the open zone is at (100,250), 90 away
        assert self.drag("func2", Point(100, 160)) == DropOutcome.REVERTED
        check_invariants(self.controller)

    def test_reset_idempotence(self):
        self.drag("func1", Point(100, 160))
        self.drag("func2", Point(100, 250))
        self.controller.pointer_down("func3", Point(400, 190))

        self.controller.reset()
        once = self.controller.snapshot()
        self.controller.reset()
        twice = self.controller.snapshot()

        assert once == twice
        assert self.controller.state == DragState.IDLE
        assert once.nodes == (Node(0, Point(100, 70), "Node 0", None, True),)
        assert once.connections == ()
        assert not any(i.placed for i in once.items)
        assert once.zones == (DropZone("drop0", 1, Point(100, 160), False),)

    def test_reset_then_rebuild(self):
        self.drag("func1", Point(100, 160))
        self.controller.reset()
        assert self.drag("func1", Point(100, 160)) == DropOutcome.COMMITTED
        assert self.controller.builder.connections() == (Connection(0, 1, "L1"),)

    @pytest.mark.parametrize("release, outcome", [
        (Point(159.9, 160), DropOutcome.COMMITTED),
        (Point(160, 160), DropOutcome.REVERTED),
    ])
    def test_hit_radius_boundary(self, release, outcome):
        assert self.drag("func1", release) == outcome

    def test_snapshot_is_not_changed_by_commit(self):
        """A snapshot taken before a commit still shows the pre-commit model."""
        self.controller.pointer_down("func1", Point(400, 50))
        self.controller.pointer_move(Point(110, 165))
        before = self.controller.snapshot()
        nodes, connections = list(before.nodes), list(before.connections)
        items, zones = list(before.items), list(before.zones)

        assert self.controller.pointer_up() == DropOutcome.COMMITTED

        assert list(before.nodes) == nodes and len(before.nodes) == 1
        assert list(before.connections) == connections == []
        assert list(before.items) == items
        assert before.items[0].placed is False
        assert before.items[0].current_position == Point(110, 165)
        assert list(before.zones) == zones
        assert before.open_zone == DropZone("drop0", 1, Point(100, 160), False)
        assert before.drag.item_id == "func1"

        after = self.controller.snapshot()
        assert len(after.nodes) == 2 and after.items[0].placed is True

    def test_snapshot_is_not_changed_by_reset(self):
        self.drag("func1", Point(100, 160))
        self.drag("func2", Point(100, 250))
        before = self.controller.snapshot()

        self.controller.reset()

        assert [n.id for n in before.nodes] == [0, 1, 2]
        assert [c.label for c in before.connections] == ["L1", "L2"]
        assert [i.placed for i in before.items] == [True, True, False, False]
        assert len(before.zones) == 3 and before.open_zone.target_node_id == 3

    def test_unknown_item_raises_while_idle_or_dragging(self):
        with pytest.raises(UnknownItemError):
            self.controller.pointer_down("nope", Point(0, 0))

        self.controller.pointer_down("func1", Point(400, 50))
        with pytest.raises(UnknownItemError):
            self.controller.pointer_down("nope", Point(0, 0))
        assert self.controller.dragging_item_id == "func1"

    def test_pointer_positions_may_be_plain_tuples(self):
        self.controller.pointer_down("func1", (410, 60))
        self.controller.pointer_move((120, 175))
        assert self.controller.registry.get("func1").current_position == Point(110, 165)
        assert self.controller.pointer_up() == DropOutcome.COMMITTED

from hexflash.card_model import SimulationNode
from hexflash.drag import DragController


def card(i=0, x=100.0, y=100.0):
    return SimulationNode(id=i, term="t", definition="d", importance=5,
                          radius=50.0, x=x, y=y, vx=4.0, vy=-2.0)


def test_press_keeps_pointer_offset_and_stops_node():
    drag = DragController()
    node = card()
    drag.pointer_down(node, 110, 95)
    assert drag.is_dragging and drag.node is node
    assert node.is_dragging
    assert (node.vx, node.vy) == (0.0, 0.0)

    drag.pointer_move(210, 195)
    assert (node.x, node.y) == (200, 200)


def test_release_returns_node_to_integrator():
    drag = DragController()
    node = card()
    drag.pointer_down(node, 100, 100)
    drag.pointer_move(160, 100)
    assert drag.pointer_up() is True
    assert not node.is_dragging
    assert not drag.is_dragging
    assert drag.node is None


def test_small_travel_counts_as_click():
    drag = DragController(click_tolerance=4)
    node = card()
    drag.pointer_down(node, 100, 100)
    drag.pointer_move(102, 101)
    assert drag.pointer_up() is False


def test_move_and_release_while_idle_do_nothing():
    drag = DragController()
    drag.pointer_move(10, 10)
    assert drag.pointer_up() is False


def test_second_press_ends_first_drag():
    drag = DragController()
    first, second = card(0), card(1, 300, 300)
    drag.pointer_down(first, 100, 100)
    drag.pointer_down(second, 300, 300)
    assert not first.is_dragging
    assert second.is_dragging
    drag.pointer_move(320, 300)
    assert (first.x, second.x) == (100, 320)


def test_cancel_clears_flag():
    drag = DragController()
    node = card()
    drag.pointer_down(node, 100, 100)
    drag.cancel()
    assert not node.is_dragging
    assert not drag.is_dragging

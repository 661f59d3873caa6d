import pytest

from hexflash.card_model import SimulationNode
from hexflash.selection import CardSelection, SelectionFull


def cards(n):
    return [SimulationNode(id=i, term=f"term{i}", definition="d", importance=5, radius=50)
            for i in range(n)]


def test_toggle_selects_and_deselects():
    sel = CardSelection()
    a, b = cards(2)
    assert sel.toggle(a) is True
    assert sel.toggle(b) is True
    assert sel.terms == ["term0", "term1"]
    assert sel.combined_topic == "term0 + term1"
    assert sel.toggle(a) is False
    assert sel.terms == ["term1"]


def test_limit_of_five():
    sel = CardSelection()
    nodes = cards(6)
    for node in nodes[:5]:
        sel.toggle(node)
    with pytest.raises(SelectionFull):
        sel.toggle(nodes[5])
    assert len(sel) == 5
    assert nodes[5] not in sel


def test_remove_and_clear():
    sel = CardSelection()
    a, b, c = cards(3)
    for node in (a, b, c):
        sel.toggle(node)
    sel.remove(1)
    assert sel.nodes == [a, c]
    sel.clear()
    assert len(sel) == 0
    assert sel.combined_topic == ""

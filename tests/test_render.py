"""Tests for the optional Pillow debug renderer."""

import pytest

from conftest import TREE, make_definitions, make_landscape
from tilepath import PathFinder, RenderUnavailableError
from tilepath import render as render_module

pytestmark = pytest.mark.render


def test_render_marks_blocked_cells_and_path():
    pytest.importorskip("PIL")
    pathfinder = PathFinder(make_definitions(), make_landscape())
    pathfinder.place_object({"id": TREE, "x": 10, "y": 10})

    image = pathfinder.render([(0, 0), (1, 0)])

    assert image.size == (96, 96)
    # Image coordinates are (column, row) = grid (x, y).
    assert image.getpixel((74, 20)) == render_module.BLOCKED_COLOR
    assert image.getpixel((75, 21)) == render_module.BLOCKED_COLOR
    assert image.getpixel((0, 0)) == render_module.FREE_COLOR
    assert image.getpixel((94, 0)) == render_module.PATH_COLOR
    assert image.getpixel((93, 1)) == render_module.PATH_COLOR


def test_render_without_pillow_raises(monkeypatch):
    monkeypatch.setattr(render_module, "Image", None)
    pathfinder = PathFinder(make_definitions(), make_landscape())

    assert not render_module.rendering_available()
    with pytest.raises(RenderUnavailableError, match="tilepath\\[render\\]"):
        pathfinder.render()

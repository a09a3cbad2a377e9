import pytest

from astargrid.app.session import EditorSession
from astargrid.core.types import Grid, Terrain


@pytest.fixture
def session():
    return EditorSession(Grid.empty(4, 4))


def test_defaults_endpoints_to_corners(session):
    assert session.grid.start == (0, 0)
    assert session.grid.goal == (3, 3)
    assert session.selected_algo == "A*"
    assert session.state == "Idle"


def test_solve_fills_overlays(session):
    res = session.solve()
    assert res.status == "done"
    assert session.state == "Done"
    assert session.finished
    assert session.path == [(0, 0), (1, 1), (2, 2), (3, 3)]
    assert (0, 0) in session.closed_set
    assert not (session.open_set & session.closed_set)
    assert session.last_metrics["path_len"] == 4


def test_step_by_step(session):
    session.step()
    assert session.closed_set == {(0, 0)}
    assert session.open_set == {(0, 1), (1, 0), (1, 1)}
    assert session.state == "Idle"


def test_painting_obstacles_resets_search(session):
    session.solve()
    assert session.apply_brush((1, 1))
    assert session.grid.is_block((1, 1))
    assert session.state == "Idle"
    assert session.path == []
    assert not session.closed_set

    session.solve()
    assert (1, 1) not in session.path
    assert len(session.path) == 5


def test_cannot_block_start_or_goal(session):
    assert not session.apply_brush((0, 0))
    assert not session.apply_brush((3, 3))
    assert not session.grid.is_block((0, 0))


def test_cannot_move_start_onto_obstacle(session):
    session.apply_brush((2, 2))
    session.set_brush("start")
    assert not session.apply_brush((2, 2))
    assert session.apply_brush((3, 0))
    assert session.grid.start == (3, 0)


def test_goal_brush(session):
    session.set_brush("goal")
    assert session.apply_brush((0, 3))
    session.solve()
    assert session.path == [(0, 0), (0, 1), (0, 2), (0, 3)]


def test_terrain_brush(session):
    session.set_brush(Terrain.ROCKY)
    assert session.apply_brush((0, 0))  # terrain under start is fine
    assert session.grid.terrain_at((0, 0)) is Terrain.ROCKY


def test_out_of_bounds_click_is_ignored(session):
    assert not session.apply_brush((4, 0))
    assert not session.apply_brush((-1, 2))


def test_unknown_brush(session):
    with pytest.raises(ValueError):
        session.set_brush("eraser")


def test_enclosed_goal_reports_no_path(session):
    for cell in [(2, 2), (2, 3), (3, 2)]:
        session.apply_brush(cell)
    res = session.solve()
    assert res.status == "no_path"
    assert session.state == "No path"
    assert session.path == []


def test_switch_algo(session):
    session.solve()
    session.switch_algo("Dijkstra")
    assert session.algo.name == "Dijkstra"
    assert session.state == "Idle"
    assert session.last_metrics["algo"] == "Dijkstra"
    session.solve()
    assert len(session.path) == 4
    with pytest.raises(ValueError):
        session.switch_algo("BFS")


def test_clear(session):
    session.apply_brush((1, 1))
    session.clear()
    assert not session.grid.is_block((1, 1))


def test_load_grid_keeps_algorithm(session):
    session.switch_algo("Dijkstra")
    session.load_grid(Grid.empty(2, 5))
    assert session.grid.goal == (1, 4)
    assert session.selected_algo == "Dijkstra"
    session.solve()
    assert session.path[-1] == (1, 4)

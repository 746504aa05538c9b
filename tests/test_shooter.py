from __future__ import annotations

from blaster.entities import Control, Direction
from blaster.shooter import derive_facing


U, D, L, R = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def test_derive_facing_uses_canonical_order() -> None:
    assert derive_facing([L, U]) == (U, L)
    assert derive_facing([R, D]) == (D, R)
    assert derive_facing([R]) == (R,)


def test_derive_facing_rejects_invalid_combinations() -> None:
    assert derive_facing([]) is None
    assert derive_facing([U, D]) is None
    assert derive_facing([R, L]) is None
    assert derive_facing([U, D, L]) is None
    assert derive_facing([U, D, L, R]) is None


def test_shooter_starts_centred_facing_up(make_controller) -> None:
    ctl = make_controller(spawn=False)
    shooter = ctl.state.shooter
    assert (shooter.x, shooter.y) == (190, 190)
    assert shooter.facing == (U,)
    assert shooter.facing_label == "up"


def test_diagonal_hold_moves_both_axes_in_one_tick(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.UP, True)
    ctl.handle_control(Control.LEFT, True)
    ctl.advance(60)
    shooter = ctl.state.shooter
    assert (shooter.x, shooter.y) == (180, 180)
    assert shooter.facing_label == "up-left"


def test_opposite_directions_cancel_and_keep_facing(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.RIGHT, True)
    ctl.handle_control(Control.LEFT, True)
    assert ctl.state.shooter.facing == (R,)
    ctl.advance(600)
    assert (ctl.state.shooter.x, ctl.state.shooter.y) == (190, 190)


def test_releasing_keys_refaces_then_keeps_last_facing(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.DOWN, True)
    ctl.handle_control(Control.RIGHT, True)
    assert ctl.state.shooter.facing == (D, R)
    ctl.handle_control(Control.DOWN, False)
    ctl.handle_control(Control.RIGHT, False)
    assert ctl.state.shooter.facing == (R,)


def test_fire_does_not_change_facing(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.LEFT, True)
    ctl.handle_control(Control.FIRE, True)
    assert ctl.state.shooter.facing == (L,)


def test_shooter_stays_inside_arena(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.LEFT, True)
    ctl.handle_control(Control.UP, True)
    ctl.advance(5000)
    assert (ctl.state.shooter.x, ctl.state.shooter.y) == (0, 0)
    ctl.handle_control(Control.LEFT, False)
    ctl.handle_control(Control.UP, False)
    ctl.handle_control(Control.RIGHT, True)
    ctl.handle_control(Control.DOWN, True)
    ctl.advance(5000)
    assert (ctl.state.shooter.x, ctl.state.shooter.y) == (380, 380)


def test_motion_runs_on_its_own_period(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.DOWN, True)
    ctl.advance(59)
    assert ctl.state.shooter.y == 190
    ctl.advance(1)
    assert ctl.state.shooter.y == 200
    ctl.advance(120)
    assert ctl.state.shooter.y == 220

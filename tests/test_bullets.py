from __future__ import annotations

from blaster.entities import Control, Direction, Target
from blaster.port import BULLET, TARGET


def _place_target(ctl, x, y) -> Target:
    target = Target(x=x, y=y, size=ctl.config.target_size, visible=True)
    ctl.state.targets.append(target)
    ctl.state.targets_spawned += 1
    ctl.port.add_proxy(TARGET, target)
    return target


def _face(ctl, *controls: Control) -> None:
    """Hold exactly ``controls`` among the direction controls"""
    for control in (Control.UP, Control.DOWN, Control.LEFT, Control.RIGHT):
        ctl.handle_control(control, False)
    for control in controls:
        ctl.handle_control(control, True)


def test_bullet_copies_facing_at_spawn(make_controller) -> None:
    ctl = make_controller(spawn=False)
    _face(ctl, Control.UP, Control.RIGHT)
    bullet = ctl.bullets.spawn()
    assert bullet.directions == (Direction.UP, Direction.RIGHT)
    assert (bullet.x, bullet.y) == (ctl.state.shooter.x, ctl.state.shooter.y)

    _face(ctl, Control.DOWN)
    assert ctl.state.shooter.facing == (Direction.DOWN,)
    assert bullet.directions == (Direction.UP, Direction.RIGHT)
    ctl.advance(30)
    assert (bullet.x, bullet.y) == (195, 185)


def test_bullet_hit_destroys_target_and_scores(make_controller) -> None:
    ctl = make_controller(spawn=False)
    _face(ctl, Control.RIGHT)
    target = _place_target(ctl, 200, 190)
    bullet = ctl.bullets.spawn()

    ctl.advance(30)

    assert not target.alive
    assert ctl.state.targets == []
    assert ctl.state.score == 1
    assert ctl.port.score_text == "001"
    assert not bullet.alive
    assert ctl.state.bullets == []
    assert ctl.port.entities(BULLET) == []
    assert ctl.port.entities(TARGET) == []


def test_one_bullet_destroys_at_most_one_target(make_controller) -> None:
    ctl = make_controller(spawn=False)
    _face(ctl, Control.RIGHT)
    _place_target(ctl, 200, 180)
    _place_target(ctl, 200, 195)
    ctl.bullets.spawn()
    ctl.advance(30)
    assert ctl.state.score == 1
    assert len(ctl.state.targets) == 1


def test_bullet_removed_after_leaving_arena(make_controller) -> None:
    ctl = make_controller(spawn=False)
    bullet = ctl.bullets.spawn()
    bullet.y = -5

    ctl.advance(30)
    assert bullet.alive
    assert bullet.y == -10

    ctl.advance(30)
    assert not bullet.alive
    assert bullet.y == -10
    assert ctl.state.bullets == []
    assert ctl.port.entities(BULLET) == []


def test_diagonal_bullet_stops_instead_of_sliding(make_controller) -> None:
    ctl = make_controller(spawn=False)
    _face(ctl, Control.UP, Control.LEFT)
    bullet = ctl.bullets.spawn()
    bullet.x, bullet.y = 100, -10

    ctl.advance(30)
    assert not bullet.alive
    assert (bullet.x, bullet.y) == (100, -10)


def test_fire_rate_follows_fire_period(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.FIRE, True)
    ctl.advance(1000)
    assert len(ctl.state.bullets) == 10
    assert len(ctl.port.entities(BULLET)) == 10

    ctl.handle_control(Control.FIRE, False)
    ctl.advance(200)
    assert len(ctl.state.bullets) == 10


def test_no_bullets_without_fire(make_controller) -> None:
    ctl = make_controller(spawn=False)
    ctl.handle_control(Control.UP, True)
    ctl.advance(1000)
    assert ctl.state.bullets == []

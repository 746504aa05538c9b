"""
Arcade front end: draws a SceneBuffer and feeds keyboard input to the round
"""

from __future__ import annotations

import random
from typing import Optional

import arcade

from .config import GameConfig
from .entities import Control
from .port import BULLET, SHOOTER, TARGET, SceneBuffer
from .round import RoundController

HUD_HEIGHT = 40

KEYMAP = {
    arcade.key.UP: Control.UP,
    arcade.key.DOWN: Control.DOWN,
    arcade.key.LEFT: Control.LEFT,
    arcade.key.RIGHT: Control.RIGHT,
    arcade.key.SPACE: Control.FIRE,
}


class ArenaWindow(arcade.Window):
    """Arcade window rendering one arena"""

    def __init__(self, controller: RoundController, scale: float = 1.5, interactive: bool = True):
        self.controller = controller
        self.scale = scale
        self.interactive = interactive
        self.arena_w, self.arena_h = controller.port.arena_size()
        super().__init__(
            int(self.arena_w * scale),
            int(self.arena_h * scale) + HUD_HEIGHT,
            "Target Blaster",
        )

        # Colors
        self.background_color = (18, 18, 22)
        self.ARENA_C = (30, 30, 38)
        self.SHOOTER_C = (80, 200, 120)
        self.ARROW_C = (240, 240, 240)
        self.TARGET_C = (220, 80, 80)
        self.BULLET_C = (180, 180, 220)
        self.HUD_C = (220, 220, 220)
        self.POPUP_C = (0, 0, 0, 200)
        self.BUTTON_C = (70, 110, 200)

    @property
    def scene(self) -> SceneBuffer:
        return self.controller.port

    # ----------------------------
    # Drawing
    # ----------------------------

    def _rect(self, box, color):
        s = self.scale
        # Arena y grows downward, arcade y grows upward
        arcade.draw_lrbt_rectangle_filled(
            box.left * s,
            box.right * s,
            (self.arena_h - box.bottom) * s,
            (self.arena_h - box.top) * s,
            color,
        )

    def _button_bounds(self):
        cx, cy = self.width / 2, (self.height - HUD_HEIGHT) / 2
        return cx - 60, cx + 60, cy - 50, cy - 20

    def on_draw(self):
        """Draw the current scene"""
        self.clear()
        arena_top = self.arena_h * self.scale
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, arena_top, self.ARENA_C)

        scene = self.scene
        for target in scene.entities(TARGET):
            if target.visible:
                self._rect(target.box, self.TARGET_C)
        for bullet in scene.entities(BULLET):
            self._rect(bullet.box, self.BULLET_C)
        for shooter in scene.entities(SHOOTER):
            self._rect(shooter.box, self.SHOOTER_C)
            self._draw_arrow(shooter)

        # HUD
        arcade.draw_text(f"Score: {scene.score_text}", 12, arena_top + 12, self.HUD_C, 14)
        arcade.draw_text(scene.timer_text, self.width - 100, arena_top + 12, self.HUD_C, 14)

        if scene.result_visible:
            self._draw_popup(scene)

    def _draw_arrow(self, shooter):
        s = self.scale
        cx = (shooter.x + shooter.size / 2) * s
        cy = (self.arena_h - shooter.y - shooter.size / 2) * s
        dx = sum(d.sign for d in shooter.facing if d.axis == "x")
        dy = -sum(d.sign for d in shooter.facing if d.axis == "y")
        reach = shooter.size * s * 0.6
        arcade.draw_line(cx, cy, cx + dx * reach, cy + dy * reach, self.ARROW_C, 3)

    def _draw_popup(self, scene: SceneBuffer):
        arena_top = self.arena_h * self.scale
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, arena_top, self.POPUP_C)
        arcade.draw_text(
            scene.result_message or "", self.width / 2, arena_top / 2 + 20,
            self.HUD_C, 20, anchor_x="center",
        )
        left, right, bottom, top = self._button_bounds()
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, self.BUTTON_C)
        arcade.draw_text(
            scene.result_label or "", self.width / 2, bottom + 8,
            self.HUD_C, 14, anchor_x="center",
        )

    # ----------------------------
    # Input / update
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.interactive:
            self.controller.advance(delta_time * 1000)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if not self.interactive:
            return
        if symbol == arcade.key.ENTER and self.scene.result_visible:
            self.controller.press_start()
        elif symbol in KEYMAP:
            self.controller.handle_control(KEYMAP[symbol], True)

    def on_key_release(self, symbol: int, modifiers: int):
        if self.interactive and symbol in KEYMAP:
            self.controller.handle_control(KEYMAP[symbol], False)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if not (self.interactive and self.scene.result_visible):
            return
        left, right, bottom, top = self._button_bounds()
        if left <= x <= right and bottom <= y <= top:
            self.controller.press_start()


def run_game(config: Optional[GameConfig] = None, seed: Optional[int] = None, scale: float = 1.5):
    """Open a window and play until it is closed"""
    config = (config or GameConfig()).validate()
    scene = SceneBuffer(config.width, config.height)
    controller = RoundController(scene, config, rng=random.Random(seed))
    ArenaWindow(controller, scale=scale)
    arcade.run()
    return controller

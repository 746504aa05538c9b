"""
Rendering / input port
======================
The simulation core never draws anything. It reports entity creation,
movement and removal, HUD text and the round result through a
``RenderPort``; the front end (arcade window, gym env, tests) decides what
to do with them. Held controls flow the other way, through
``RoundController.handle_control``, and only while the port is listening.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

from .entities import Entity

SHOOTER = "shooter"
BULLET = "bullet"
TARGET = "target"


class RenderPort(Protocol):
    def arena_size(self) -> Tuple[int, int]: ...

    def add_proxy(self, kind: str, entity: Entity) -> None: ...

    def move_proxy(self, entity: Entity) -> None: ...

    def remove_proxy(self, entity: Entity) -> None: ...

    def clear_proxies(self, kind: str) -> None: ...

    def set_score(self, text: str) -> None: ...

    def set_timer(self, text: str) -> None: ...

    def show_result(self, message: str, label: str) -> None: ...

    def hide_result(self) -> None: ...

    def start_listening(self) -> None: ...

    def stop_listening(self) -> None: ...


@dataclass
class Proxy:
    kind: str
    entity: Entity


class SceneBuffer:
    """In-memory port: the scene model drawn by the window and inspected in tests"""

    def __init__(self, width: int = 400, height: int = 400):
        self.width = width
        self.height = height
        self.proxies: Dict[int, Proxy] = {}
        self.score_text = "000"
        self.timer_text = "00:00:00"
        self.result_message: Optional[str] = None
        self.result_label: Optional[str] = None
        self.result_visible = False
        self.listening = False

    def arena_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def add_proxy(self, kind: str, entity: Entity) -> None:
        self.proxies[entity.id] = Proxy(kind, entity)

    def move_proxy(self, entity: Entity) -> None:
        # Proxies hold the entity itself, nothing to update
        pass

    def remove_proxy(self, entity: Entity) -> None:
        self.proxies.pop(entity.id, None)

    def clear_proxies(self, kind: str) -> None:
        self.proxies = {k: p for k, p in self.proxies.items() if p.kind != kind}

    def entities(self, kind: str) -> List[Entity]:
        return [p.entity for p in self.proxies.values() if p.kind == kind]

    def set_score(self, text: str) -> None:
        self.score_text = text

    def set_timer(self, text: str) -> None:
        self.timer_text = text

    def show_result(self, message: str, label: str) -> None:
        self.result_message = message
        self.result_label = label
        self.result_visible = True

    def hide_result(self) -> None:
        self.result_visible = False

    def start_listening(self) -> None:
        self.listening = True

    def stop_listening(self) -> None:
        self.listening = False

"""
In-memory UI host (UiHostPort implementation).

Keeps mounted markup per container and simulates delegated clicks on
elements marked with data-sciro. Used headless and in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from sciro.components.publisher.component import extract_actions


@dataclass
class MountedContent:
    markup: str
    actions: tuple[str, ...]
    on_action: Callable[[str], None]


@dataclass
class InMemoryUiHost:
    containers: dict[str, MountedContent | None] = field(default_factory=dict)
    mount_count: int = 0

    def ensure_container(self, container_id: str) -> None:
        self.containers.setdefault(container_id, None)

    def mount(
        self,
        container_id: str,
        markup: str,
        on_action: Callable[[str], None],
    ) -> None:
        self.containers[container_id] = MountedContent(
            markup=markup,
            actions=extract_actions(markup),
            on_action=on_action,
        )
        self.mount_count += 1

    def clear(self, container_id: str) -> None:
        if container_id in self.containers:
            self.containers[container_id] = None

    # --- Simulation Helpers ---

    def markup(self, container_id: str) -> str:
        content = self.containers.get(container_id)
        return content.markup if content is not None else ""

    def click(self, container_id: str, action: str) -> bool:
        """
        Click the first element carrying data-sciro=action.

        Returns:
            False if no such element is mounted
        """
        content = self.containers.get(container_id)
        if content is None or action not in content.actions:
            return False
        content.on_action(action)
        return True

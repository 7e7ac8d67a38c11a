"""Messages produced by accepted actions and the channel that delivers them.

The engine never talks to a transport itself. ``process_action`` returns the
notifications in its result and, when a :class:`Notifier` is supplied,
delivers them through it: room-wide messages for log lines every player may
see, single-player messages for private information such as peeked hands.
"""

import logging
from typing import Protocol

from pydantic import BaseModel

from citadels.schemas.game_engine import GameState

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    message: str
    player_index: int | None = None  # None means the whole room

    @property
    def is_private(self) -> bool:
        return self.player_index is not None


class Notifier(Protocol):
    """Fire-and-forget messaging channel for one or more rooms."""

    def notify_room(self, room_id: str, message: str) -> None: ...

    def notify_player(self, room_id: str, user_id: str, message: str) -> None: ...


class InMemoryNotifier:
    """Notifier that keeps every message, for tests and local tools."""

    def __init__(self) -> None:
        self.room_messages: list[tuple[str, str]] = []
        self.player_messages: list[tuple[str, str, str]] = []

    def notify_room(self, room_id: str, message: str) -> None:
        self.room_messages.append((room_id, message))

    def notify_player(self, room_id: str, user_id: str, message: str) -> None:
        self.player_messages.append((room_id, user_id, message))

    def messages_for(self, user_id: str) -> list[str]:
        return [message for _, uid, message in self.player_messages if uid == user_id]


def deliver_notifications(
    state: GameState,
    notifications: list[Notification],
    notifier: Notifier,
    room_id: str,
) -> None:
    """Send notifications through ``notifier``, resolving player indices to user ids."""
    for notification in notifications:
        if notification.player_index is None:
            notifier.notify_room(room_id, notification.message)
            continue
        user_id = state.players[notification.player_index].id
        notifier.notify_player(room_id, user_id, notification.message)
    logger.debug("Delivered %d notifications to room %s", len(notifications), room_id)

"""Action handler registry.

Every :class:`ActionTag` is served by exactly one handler registered with the
``@handler`` decorator. A handler receives the working copy of the state and
the typed action; it validates its targets before touching anything and
returns an :class:`ActionOutput`. Importing this package fails if a tag has
no handler.
"""

import logging
from collections.abc import Callable
from typing import Any

from citadels.schemas.game_engine import ActionTag, GameState

from ..validation import ActionOutput

logger = logging.getLogger(__name__)

# Type alias for handler functions
HandlerFunc = Callable[[GameState, Any], ActionOutput]

# Handler registry: maps ActionTag to handler function
_handlers: dict[ActionTag, HandlerFunc] = {}


def handler(tag: ActionTag) -> Callable[[HandlerFunc], HandlerFunc]:
    """Decorator to register a handler for an action tag.

    Usage:
        @handler(ActionTag.END_TURN)
        def handle_end_turn(state: GameState, action: EndTurnAction) -> ActionOutput:
            ...
    """

    def decorator(func: HandlerFunc) -> HandlerFunc:
        if tag in _handlers:
            raise RuntimeError(f"Duplicate handler for {tag.value}: {func.__name__}")
        _handlers[tag] = func
        logger.debug("Registered handler for %s: %s", tag.value, func.__name__)
        return func

    return decorator


def get_handler(tag: ActionTag) -> HandlerFunc:
    return _handlers[tag]


# Import handlers to trigger registration
from . import build  # noqa: E402, F401
from . import city  # noqa: E402, F401
from . import crown  # noqa: E402, F401
from . import draft  # noqa: E402, F401
from . import hands  # noqa: E402, F401
from . import markers  # noqa: E402, F401
from . import resources  # noqa: E402, F401

_missing = [tag.value for tag in ActionTag if tag not in _handlers]
if _missing:
    raise RuntimeError(f"Action tags without a handler: {', '.join(_missing)}")

__all__ = [
    "HandlerFunc",
    "get_handler",
    "handler",
]

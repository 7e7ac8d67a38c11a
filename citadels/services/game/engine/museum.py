"""Cards tucked under the Museum and the artifacts shown for them.

Artifacts are assigned lazily: whenever there are more tucked cards than
artifacts, a freshly shuffled batch of every artifact is appended. Assigned
artifacts never move, so card ``i`` always shows artifact ``i``.
"""

from citadels.schemas.game_engine import DistrictName, Museum, Prng

from . import rng

ARTIFACTS: tuple[str, ...] = (
    "⚱️",
    "🏺",
    "🖼️",
    "🗿",
    "🏛️",
    "⛲",
    "🕰️",
    "🦴",
    "🦾",
    "⚰️",
    "🚀",
    "🦖",
    "🦣",
    "🦤",
    "🦕",
    "💎",
    "🪩",
    "🔱",
    "🧋",
)


def tuck(museum: Museum, card: DistrictName, prng: Prng) -> None:
    museum.cards.append(card)
    if len(museum.cards) > len(museum.artifacts):
        batch = list(ARTIFACTS)
        rng.shuffle(prng, batch)
        museum.artifacts.extend(batch)


def artifacts_on_display(museum: Museum) -> list[str]:
    return museum.artifacts[: len(museum.cards)]

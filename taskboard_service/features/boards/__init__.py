"""Board and card records plus the read-only sources that list them."""

from taskboard_service.features.boards.schemas import (
    CARD_TYPE,
    Board,
    Card,
    PropertyDefinition,
    PropertyOption,
)
from taskboard_service.features.boards.source import (
    BoardSource,
    BoardSourceError,
    InMemoryBoardSource,
    JsonFileBoardSource,
)

__all__ = [
    "CARD_TYPE",
    "Board",
    "BoardSource",
    "BoardSourceError",
    "Card",
    "InMemoryBoardSource",
    "JsonFileBoardSource",
    "PropertyDefinition",
    "PropertyOption",
]

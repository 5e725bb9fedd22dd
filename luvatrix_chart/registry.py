from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from .errors import TypeNotRegisteredError
from .series import LinearSeries, SeriesBase, StockSeries
from .stickers import StickerBase, TrendLineSticker

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Factory = Callable[[dict[str, Any], str], T]


class TypeRegistry(Generic[T]):
    """Maps stable type identifiers to factories ``(params, path) -> object``."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._factories: dict[str, Factory[T]] = {}
        self._type_ids: dict[type, str] = {}

    def register(self, type_id: str, factory: Factory[T], cls: type | None = None) -> None:
        if not type_id or not isinstance(type_id, str):
            raise ValueError("type_id must be a non-empty string")
        if type_id in self._factories:
            raise ValueError(f"{self.kind} type `{type_id}` already registered")
        self._factories[type_id] = factory
        LOGGER.debug("registered %s type %s", self.kind, type_id)
        if cls is not None:
            self._type_ids[cls] = type_id

    def register_class(self, cls: type) -> type:
        """Register a class exposing ``type_id`` and ``from_dict(doc, path)``."""
        self.register(cls.type_id, cls.from_dict, cls)
        return cls

    def unregister(self, type_id: str) -> None:
        self._factories.pop(type_id, None)
        for cls, tid in list(self._type_ids.items()):
            if tid == type_id:
                del self._type_ids[cls]

    def is_registered(self, type_id: str) -> bool:
        return type_id in self._factories

    def type_ids(self) -> list[str]:
        return sorted(self._factories)

    def type_id_of(self, obj: object) -> str:
        type_id = self._type_ids.get(type(obj)) or getattr(obj, "type_id", "")
        if not type_id or type_id not in self._factories:
            raise TypeNotRegisteredError(self.kind, type_id or type(obj).__name__)
        return type_id

    def create(self, type_id: str, params: dict[str, Any], path: str = "") -> T:
        factory = self._factories.get(type_id)
        if factory is None:
            raise TypeNotRegisteredError(self.kind, type_id, path=path)
        return factory(params, path)


SERIES_TYPES: TypeRegistry[SeriesBase] = TypeRegistry("series")
SERIES_TYPES.register_class(LinearSeries)
SERIES_TYPES.register_class(StockSeries)

STICKER_TYPES: TypeRegistry[StickerBase] = TypeRegistry("sticker")
STICKER_TYPES.register_class(TrendLineSticker)

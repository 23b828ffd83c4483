"""Name-keyed lookup of the source and effect classes the CLI can build."""

from __future__ import annotations

from typing import Dict, Generic, List, Type, TypeVar

from .base import AudioEffect, AudioSource

T = TypeVar("T")


class _Catalogue(Generic[T]):
    """Classes of one kind, keyed by their ``name`` attribute."""

    def __init__(self, kind: str, base: Type[T]) -> None:
        self.kind = kind
        self._base = base
        self._classes: Dict[str, Type[T]] = {}

    def add(self, cls: Type[T]) -> Type[T]:
        name = getattr(cls, "name", None)
        if not isinstance(name, str) or not name or name == self._base.name:
            raise ValueError(f"{self.kind} class {cls.__name__} needs its own name")
        existing = self._classes.get(name)
        # Re-registering the same class (e.g. on module reload) is harmless.
        if existing is not None and existing.__qualname__ != cls.__qualname__:
            raise ValueError(
                f"{self.kind} name '{name}' is already taken by {existing.__qualname__}"
            )
        self._classes[name] = cls
        return cls

    def names(self) -> List[str]:
        return sorted(self._classes)

    def create(self, name: str, **kwargs) -> T:
        try:
            cls = self._classes[name]
        except KeyError:
            raise KeyError(
                f"Unknown {self.kind} '{name}' (known: {', '.join(self.names()) or 'none'})"
            ) from None
        return cls(**kwargs)


class _Registry:
    def __init__(self) -> None:
        self._sources: _Catalogue[AudioSource] = _Catalogue("source", AudioSource)
        self._effects: _Catalogue[AudioEffect] = _Catalogue("effect", AudioEffect)

    def register_source(self, cls: Type[AudioSource]) -> Type[AudioSource]:
        return self._sources.add(cls)

    def register_effect(self, cls: Type[AudioEffect]) -> Type[AudioEffect]:
        return self._effects.add(cls)

    def sources(self) -> List[str]:
        return self._sources.names()

    def effects(self) -> List[str]:
        return self._effects.names()

    def create_source(self, name: str, **kwargs) -> AudioSource:
        return self._sources.create(name, **kwargs)

    def create_effect(self, name: str, **kwargs) -> AudioEffect:
        return self._effects.create(name, **kwargs)


registry = _Registry()

# folio/client/state.py
"""
Immutable snapshots held by the client stores.

Entities are kept exactly as the API returns them (camelCase dicts). A store
never mutates a snapshot; every change produces a new one through
dataclasses.replace() and the reducers below.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

Entity = Dict[str, Any]


@dataclass(frozen=True)
class AuthState:
    user: Optional[Entity] = None
    is_logged_in: bool = False
    is_loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class AdminState:
    posts: Tuple[Entity, ...] = ()
    projects: Tuple[Entity, ...] = ()
    profile: Optional[Entity] = None
    is_loading: bool = False
    error: Optional[str] = None


def prepend(items: Tuple[Entity, ...], item: Entity) -> Tuple[Entity, ...]:
    return (item,) + tuple(items)


def replace_by_id(items: Tuple[Entity, ...], item: Entity) -> Tuple[Entity, ...]:
    """Swap in item wherever an entity with the same id sits; order is kept."""
    return tuple(item if existing.get("id") == item.get("id") else existing for existing in items)


def remove_by_id(items: Tuple[Entity, ...], item_id: str) -> Tuple[Entity, ...]:
    return tuple(existing for existing in items if existing.get("id") != item_id)

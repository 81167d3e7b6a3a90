from typing import Type, TypeVar

import esper

from match_engine.components.session import Session

C = TypeVar("C")


def get_session_entity() -> int:
    """Return the single session entity of the current esper world."""
    existing = esper.get_component(Session)
    if not existing:
        raise RuntimeError("No game session in the current world; call create_world first")
    return existing[0][0]


def session_component(component_type: Type[C]) -> C:
    return esper.component_for_entity(get_session_entity(), component_type)

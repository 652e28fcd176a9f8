"""
Classification of trace event names into categories.
"""

from typing import Dict, Optional

from ..core.types import EventCategory, FrontendOperation

EVENT_CATEGORIES: Dict[str, EventCategory] = {
    "Frontend": EventCategory.FRONTEND,
    "Backend": EventCategory.BACKEND,
    "Source": EventCategory.SOURCE,
    "InstantiateFunction": EventCategory.INSTANTIATE_FUNCTION,
    "InstantiateClass": EventCategory.INSTANTIATE_CLASS,
    "ParseClass": EventCategory.PARSE_CLASS,
    "DebugType": EventCategory.DEBUG_TYPE,
    "CodeGenFunction": EventCategory.CODE_GEN_FUNCTION,
    "DevirtSCCRepeatedPass": EventCategory.DEVIRT_PASS,
    "OptFunction": EventCategory.OPT_FUNCTION,
}

FRONTEND_OPERATIONS: Dict[EventCategory, FrontendOperation] = {
    EventCategory.INSTANTIATE_FUNCTION: FrontendOperation.INSTANTIATE_FUNCTION,
    EventCategory.INSTANTIATE_CLASS: FrontendOperation.INSTANTIATE_CLASS,
    EventCategory.PARSE_CLASS: FrontendOperation.PARSE_CLASS,
    EventCategory.DEBUG_TYPE: FrontendOperation.DEBUG_TYPE,
    EventCategory.CODE_GEN_FUNCTION: FrontendOperation.CODE_GEN_FUNCTION,
}

BACKEND_OPERATIONS = frozenset({EventCategory.DEVIRT_PASS, EventCategory.OPT_FUNCTION})

# Every category belongs to exactly one family
_FAMILIES = (
    {EventCategory.FRONTEND, EventCategory.BACKEND, EventCategory.SOURCE, EventCategory.OTHER},
    set(FRONTEND_OPERATIONS),
    set(BACKEND_OPERATIONS),
)
assert set().union(*_FAMILIES) == set(EventCategory)
assert sum(len(family) for family in _FAMILIES) == len(EventCategory)


def classify(name: str) -> EventCategory:
    """Map a raw event name to its category. Unknown names are OTHER."""
    return EVENT_CATEGORIES.get(name, EventCategory.OTHER)


def frontend_operation(category: EventCategory) -> Optional[FrontendOperation]:
    """Return the frontend operation kind of a category, or None."""
    return FRONTEND_OPERATIONS.get(category)


def is_backend_operation(category: EventCategory) -> bool:
    return category in BACKEND_OPERATIONS

from .permission import (
    FIELD_ACTIONS,
    PERMISSION_MATRIX,
    actions_for_fields,
    assert_allowed,
    is_allowed,
)

__all__ = [
    "PERMISSION_MATRIX",
    "FIELD_ACTIONS",
    "is_allowed",
    "assert_allowed",
    "actions_for_fields",
]

"""Copy helpers for JSON-compatible data (dicts, lists and primitives)."""
from typing import Any, Dict, List, Union

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


def deep_copy(obj: JsonValue) -> JsonValue:
    """
    Make a deep copy of JSON-compatible data.
    
    Every dict and list is duplicated at every nesting level; tuples are
    treated as JSON arrays and copied into lists. Any other value is
    returned as-is.
    
    Cyclic input is not detected and ends in RecursionError.
    
    Args:
        obj: Data to copy
        
    Returns:
        Copy sharing no dict or list with obj
    """
    if isinstance(obj, dict):
        return {key: deep_copy(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [deep_copy(item) for item in obj]
    return obj


def shallow_copy(obj: JsonValue) -> JsonValue:
    """
    Make a top-level-only copy of JSON-compatible data.
    
    Nested containers are shared with obj. Non-container values are
    returned as-is.
    """
    if isinstance(obj, dict):
        return dict(obj.items())
    if isinstance(obj, (list, tuple)):
        return list(obj)
    return obj


def copy(obj: JsonValue, shallow: bool = False) -> JsonValue:
    """Make a shallow copy of obj if shallow is truthy, a deep copy otherwise."""
    copy_fn = shallow_copy if shallow else deep_copy
    return copy_fn(obj)

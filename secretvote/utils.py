from dataclasses import fields, is_dataclass
from typing import Any, Dict

from secretvote.arith.rational import Rational


def dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    return {field.name: getattr(obj, field.name) for field in fields(obj)}


def to_primitive(obj: Any) -> Any:
    """Turns dataclasses, tuples and rationals into json serializable values."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {key: to_primitive(value) for key, value in dataclass_to_dict(obj).items()}
    if isinstance(obj, (list, tuple)):
        return [to_primitive(value) for value in obj]
    if isinstance(obj, Rational):
        return obj.to_exact_int() if obj.is_integer() else str(obj)
    return obj

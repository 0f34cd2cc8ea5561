from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True, init=False)
class Replacement:
    """
    Explicit `pre_emit` result: emit `values` instead of the trigger arguments.
    """

    values: Tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", tuple(values))


def is_sequence(value: Any) -> bool:
    # Strings, bytes and mappings count as single values.
    return isinstance(value, (tuple, list))


def normalize_replacement(result: Any) -> Optional[Tuple[Any, ...]]:
    """
    Turn a `pre_emit` result into replacement arguments, or None to keep the originals.

      None                -> None
      Replacement(1, 2)   -> (1, 2)
      [1, 2] / (1, 2)     -> (1, 2)
      anything else       -> (value,)
    """
    if result is None:
        return None
    if isinstance(result, Replacement):
        return result.values
    if is_sequence(result):
        return tuple(result)
    return (result,)

import math
from typing import Any


def sanitize_for_json(value: Any) -> Any:
    """
    Recursively replace NaN and +/-inf floats with ``None``.

    Starlette's JSON encoder rejects non-finite floats; a zero mid valuation,
    for example, yields an infinite mispricing percent.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: sanitize_for_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_for_json(v) for v in value]
    return value

"""Create/update form buffers and their submission."""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from loguru import logger

from admin_console.admin_client import AdminAPIError
from admin_console.listing import ListController
from admin_console.resources import FieldSpec

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(text: Any) -> float:
    """Parse a leading integer the way browser form code does; no digits gives ``NaN``."""
    if isinstance(text, (int, float)):
        return int(text) if math.isfinite(text) else math.nan
    match = _INT_PREFIX.match(str(text or ""))
    return int(match.group(1)) if match else math.nan


def parse_float(text: Any) -> float:
    if isinstance(text, (int, float)):
        return float(text)
    match = _FLOAT_PREFIX.match(str(text or ""))
    return float(match.group(1)) if match else math.nan


def split_csv_list(text: Optional[str]) -> List[str]:
    """``"wifi, pool,,"`` -> ``["wifi", "pool"]``."""
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def coerce(spec: FieldSpec, raw: Any) -> Any:
    if spec.kind == "int":
        return parse_int(raw)
    if spec.kind == "float":
        return parse_float(raw)
    if spec.kind == "optional_float":
        return parse_float(raw) if str(raw or "").strip() else None
    if spec.kind == "list":
        return raw if isinstance(raw, list) else split_csv_list(raw)
    if spec.kind == "select" and raw in ("", None):
        return None
    return raw


class FormBuffer:
    """String inputs for one create/update form, keyed by field name."""

    def __init__(self, fields: Sequence[FieldSpec], values: Optional[Mapping[str, Any]] = None):
        self.fields = tuple(fields)
        self.defaults = {spec.name: spec.default for spec in self.fields}
        self.values: Dict[str, Any] = dict(self.defaults)
        if values:
            self.values.update(values)
        self.is_open = False
        self.error: Optional[str] = None

    def open(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self.reset()
        if values:
            for spec in self.fields:
                if spec.name in values and values[spec.name] is not None:
                    value = values[spec.name]
                    if isinstance(value, list) and spec.kind == "list":
                        value = ", ".join(str(item) for item in value)
                    self.values[spec.name] = value if isinstance(value, str) else str(value)
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set(self, name: str, value: Any) -> None:
        self.values[name] = value

    def reset(self) -> None:
        self.values = dict(self.defaults)
        self.error = None

    def to_payload(self) -> Dict[str, Any]:
        return {spec.name: coerce(spec, self.values.get(spec.name, spec.default)) for spec in self.fields}


def submit_form(
    controller: ListController,
    buffer: FormBuffer,
    action: str = "create",
    record_id: Optional[str] = None,
) -> bool:
    """Send the buffer as one request.

    On success the form closes, the buffer resets and the list is refetched.
    On failure the buffer is kept, the form stays open and ``buffer.error``
    holds the server message or a generic fallback.
    """
    if action not in ("create", "update"):
        raise ValueError(f"Unsupported form action {action!r}")
    if action == "update" and not record_id:
        raise ValueError("record_id is required for updates")

    payload = buffer.to_payload()
    noun = controller.spec.label.lower()
    try:
        if action == "create":
            controller.create(payload)
        else:
            controller.update(record_id, payload)  # type: ignore[arg-type]
    except AdminAPIError as exc:
        server_message = exc.payload.get("error") if isinstance(exc.payload, dict) else None
        buffer.error = server_message or f"Failed to {action} {noun}"
        buffer.is_open = True
        logger.warning("{action} {resource} failed: {error}", action=action, resource=controller.spec.key, error=exc.message)
        return False

    logger.info("{action} {resource} succeeded", action=action, resource=controller.spec.key)
    buffer.reset()
    buffer.close()
    controller.refresh()
    return True

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from duels_run_summary.pipeline.models import RunEndEvent
from duels_run_summary.utils.io import try_parse_json

logger = logging.getLogger(__name__)


def unpack_messages(event: dict[str, Any] | None) -> list[RunEndEvent]:
    """Flatten a queue batch into run-end events, dropping anything malformed.

    Each record body is a JSON list of notification wrappers (a bare wrapper
    object is accepted too); each wrapper's ``Message`` is the JSON payload.
    """
    records = (event or {}).get("Records") or []
    if not isinstance(records, list):
        return []

    wrappers: list[Any] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        body = try_parse_json(record.get("body"))
        if isinstance(body, list):
            wrappers.extend(body)
        elif body:
            wrappers.append(body)

    messages: list[RunEndEvent] = []
    dropped = 0
    for wrapper in wrappers:
        if not wrapper or not isinstance(wrapper, dict):
            dropped += 1
            continue
        payload = try_parse_json(wrapper.get("Message"))
        if not isinstance(payload, dict):
            dropped += 1
            continue
        try:
            messages.append(RunEndEvent.model_validate(payload))
        except ValidationError as exc:
            logger.debug("Dropping invalid run-end payload errors=%s", exc.error_count())
            dropped += 1

    if dropped:
        logger.info("Unpacked messages=%d dropped=%d", len(messages), dropped)
    return messages

"""Parsing of ``{% schema %}`` JSON bodies into settings."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

logger = logging.getLogger(__name__)


class SchemaSetting(BaseModel):
    """One entry of a schema's ``settings`` array.

    ``default`` is ``None`` both when the key is missing and when it is
    explicitly ``null``.
    """

    model_config = ConfigDict(extra="ignore")

    id: StrictStr
    default: Any = None

    @property
    def has_default(self) -> bool:
        return self.default is not None


def parse_schema_settings(body: str) -> list[SchemaSetting] | None:
    """Return the settings declared in a schema body, or ``None``.

    ``None`` means the body is not usable: malformed JSON, a non-object
    document, or a missing or non-list ``settings`` field. Entries that are
    not objects with a string ``id`` are dropped.
    """
    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        logger.debug("Ignoring malformed schema JSON: %s", exc)
        return None

    if not isinstance(data, dict):
        return None

    raw_settings = data.get("settings")
    if not isinstance(raw_settings, list):
        return None

    settings: list[SchemaSetting] = []
    for index, raw in enumerate(raw_settings):
        try:
            settings.append(SchemaSetting.model_validate(raw))
        except ValidationError:
            logger.debug("Ignoring schema setting #%d without a string id", index)
            continue
    return settings


__all__ = ["SchemaSetting", "parse_schema_settings"]

"""
Persistence of mixed histograms as versioned, JSON-compatible dictionaries.

The raw (unnormalized) table is stored so that a round trip reproduces the
model exactly.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import json
import logging
from typing import TYPE_CHECKING, Any

from pysatl_uq.distributions.histogram_model import MixedHistogramModel
from pysatl_uq.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping

FORMAT_VERSION = 1
_FIELDS = ("ticks_collection", "kind", "probability_table")

logger = logging.getLogger(__name__)


def serialize_mixed_histogram(model: MixedHistogramModel) -> dict[str, Any]:
    """Return a JSON-compatible dictionary describing ``model``."""
    return {
        "format_version": FORMAT_VERSION,
        "ticks_collection": [t.tolist() for t in model.ticks_collection],
        "kind": [str(k) for k in model.kind],
        "probability_table": model.probability_table.tolist(),
    }


def deserialize_mixed_histogram(data: Mapping[str, Any]) -> MixedHistogramModel:
    """
    Rebuild a model from :func:`serialize_mixed_histogram` output.

    Raises
    ------
    InvalidArgumentError
        If the format version is missing or unsupported, a field is missing,
        or the stored parameters are invalid.
    """
    version = data.get("format_version")
    if version != FORMAT_VERSION:
        raise InvalidArgumentError(
            f"Unsupported mixed histogram format version {version!r}, expected {FORMAT_VERSION}."
        )
    missing = [field for field in _FIELDS if field not in data]
    if missing:
        raise InvalidArgumentError(f"Serialized mixed histogram lacks fields: {missing}.")

    logger.debug("Restoring mixed histogram (format version %d)", version)
    return MixedHistogramModel(data["ticks_collection"], data["kind"], data["probability_table"])


def dumps(model: MixedHistogramModel) -> str:
    return json.dumps(serialize_mixed_histogram(model))


def loads(text: str) -> MixedHistogramModel:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidArgumentError("Serialized mixed histogram is not valid JSON.") from exc
    if not isinstance(data, dict):
        raise InvalidArgumentError("Serialized mixed histogram must be a JSON object.")
    return deserialize_mixed_histogram(data)


__all__ = [
    "FORMAT_VERSION",
    "serialize_mixed_histogram",
    "deserialize_mixed_histogram",
    "dumps",
    "loads",
]

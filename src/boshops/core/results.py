"""Aggregation of task result streams into domain records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol, TypeVar

from boshops.core.errors import DecodeError
from boshops.core.stream import RawRecord, decode_record

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", covariant=True)


class ResultRecord(Protocol[ModelT]):
    """Wire-format record of one result line, projectable to a domain model."""

    def to_model(self) -> ModelT:
        """Return the domain representation of this record."""
        ...


class ResultRecordType(Protocol[ModelT]):
    """Class-level contract: build a wire record from a decoded JSON object."""

    def from_json(self, payload: Mapping[str, Any]) -> ResultRecord[ModelT]:
        """Build the wire record, raising ValueError/TypeError on bad shapes."""
        ...


def decode_result_batch(
    records: Iterable[RawRecord],
    record_type: ResultRecordType[ModelT],
    *,
    skip_invalid: bool = False,
) -> list[ModelT]:
    """
    Decode raw result chunks into domain records, preserving line order.

    Each chunk is parsed as JSON, mapped onto `record_type` and projected with
    `to_model()`. By default the first bad line aborts the batch with a
    DecodeError; with `skip_invalid=True` bad lines are logged and skipped.

    Args:
        records: Raw chunks, typically from `split_records`.
        record_type: Wire-format class exposing a `from_json` classmethod.
        skip_invalid: Skip undecodable lines instead of failing.

    Returns:
        The decoded domain records in input order.
    """
    models: list[ModelT] = []
    for record in records:
        try:
            payload = decode_record(record)
            try:
                model = record_type.from_json(payload).to_model()
            except (KeyError, TypeError, ValueError, OverflowError) as exc:
                raise DecodeError(
                    f"cannot map record: {exc}", index=record.index
                ) from exc
        except DecodeError as exc:
            if not skip_invalid:
                raise
            logger.warning("skipping result %s", exc)
            continue
        models.append(model)
    return models

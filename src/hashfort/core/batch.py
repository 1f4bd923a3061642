"""Batch coordinator — hash many passwords under one cost profile.

Every item produces an explicit result value. Failures are attributed to the
index that caused them and never abort the rest of the batch.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hashfort.config import DEFAULT_LIMITS, DEFAULT_OPTIONS, HashOptions, Limits
from hashfort.core.errors import HashFortError
from hashfort.core.schemas import BatchHashResponse, BatchItemError
from hashfort.core.validation import validate_options, validate_password

if TYPE_CHECKING:
    from hashfort.core.engine import HashingEngine

logger = logging.getLogger("hashfort.batch")


@dataclass(frozen=True, slots=True)
class ItemSuccess:
    index: int
    hash: str


@dataclass(frozen=True, slots=True)
class ItemFailure:
    index: int
    message: str


ItemResult = ItemSuccess | ItemFailure


async def _process_item(
    engine: HashingEngine, index: int, password: object, options: HashOptions,
) -> ItemResult:
    try:
        validate_password(password)
        return ItemSuccess(index, await engine.hash(password, options))
    except HashFortError as e:
        return ItemFailure(index, e.message)
    except Exception:
        logger.exception("Unexpected failure hashing batch item %d", index)
        return ItemFailure(index, "Failed to hash password")


def partition(results: list[ItemResult]) -> BatchHashResponse:
    """Split item results into hashes and errors, both in ascending index order."""
    ordered = sorted(results, key=lambda r: r.index)
    return BatchHashResponse(
        hashes=[r.hash for r in ordered if isinstance(r, ItemSuccess)],
        errors=[
            BatchItemError(index=r.index, message=r.message)
            for r in ordered if isinstance(r, ItemFailure)
        ],
    )


async def process_batch(
    engine: HashingEngine,
    passwords: list,
    partial_options: object = None,
    *,
    defaults: HashOptions = DEFAULT_OPTIONS,
    limits: Limits = DEFAULT_LIMITS,
) -> BatchHashResponse:
    """Hash each password independently and aggregate the outcome.

    Size and emptiness preconditions are checked by validate_batch before this
    is called. Items run concurrently; the engine's worker pool bounds how many
    reach the primitive at once. Cancelling the caller cancels queued items.

    Returns:
        BatchHashResponse with successful hashes (ascending input index, failed
        indices skipped) and one error record per failed index.
    """
    options = validate_options(partial_options, defaults=defaults, limits=limits)
    results = await asyncio.gather(
        *(_process_item(engine, i, pwd, options) for i, pwd in enumerate(passwords))
    )
    result = partition(list(results))
    logger.debug(
        "Batch of %d processed: %d hashed, %d failed",
        len(passwords), len(result.hashes), len(result.errors),
    )
    return result

"""Sync engine: sequential chunked dispatch with exhaustive accounting.

Architecture:
    Partitioner -> (per chunk) PayloadBuilder -> Dispatcher -> Aggregator

    Chunks are processed strictly one at a time in plan order. Each dispatch
    goes through the CredentialRecoveryHandler, which owns the single
    recovery cycle allowed per dispatch. Between chunks the engine pauses
    for a fixed delay to bound the request rate; the pause is skipped after
    the final chunk.

Error Policy:
    - Per-chunk failures (exhausted retries, terminal statuses, unexpected
      errors while dispatching) become failure records and the run continues
    - ValidationError (including MissingCredentialError from a failed
      credential reload) is fatal and propagates out of the run
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from time import perf_counter
from typing import Any

from ..core.config import AccountSyncConfig, BaseSyncConfig
from ..core.credential import Credential
from ..core.enums import SyncVariant
from ..core.exceptions import ValidationError
from ..models import AssignmentPayload, DispatchOutcome, RunStatistics, TimeWindow, WorkItem
from .aggregator import ResultAggregator
from .chunking import ChunkPlanner, ChunkPolicy
from .chunking.telemetry import (
    log_chunk_completed,
    log_chunk_error,
    log_chunk_started,
    log_run_complete,
)
from .payloads import PayloadBuilder, build_interval_request
from .recovery import (
    ConsoleConfirmation,
    CredentialProvider,
    CredentialRecoveryHandler,
    DotenvCredentialProvider,
)
from .rest import Dispatcher, HTTPClient, RetryPolicy, describe_error

logger = logging.getLogger(__name__)


class SyncEngine:
    """Drives chunks through the Dispatcher and records every outcome."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        recovery: CredentialRecoveryHandler,
        aggregator: ResultAggregator | None = None,
        *,
        inter_chunk_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize sync engine.

        Args:
            dispatcher: Dispatcher bound to the variant's endpoint
            recovery: Credential recovery handler sharing the dispatcher's credential
            aggregator: Result aggregator (default: a fresh one)
            inter_chunk_delay: Pause between chunks, in seconds
            sleep: Awaitable used for the inter-chunk pause
        """
        self._dispatcher = dispatcher
        self._recovery = recovery
        self._aggregator = aggregator or ResultAggregator()
        self._inter_chunk_delay = inter_chunk_delay
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: BaseSyncConfig,
        http: HTTPClient,
        *,
        provider: CredentialProvider | None = None,
        confirm: Callable[[], Awaitable[None]] | None = None,
        env_file: str = ".env",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> SyncEngine:
        """Wire an engine from a validated configuration."""
        credential = Credential(config.auth_token)
        dispatcher = Dispatcher(
            http,
            config.api_url,
            credential,
            RetryPolicy(max_retries=config.max_retries, base_delay=config.retry_base_delay),
            sleep=sleep,
        )
        recovery = CredentialRecoveryHandler(
            credential,
            provider or DotenvCredentialProvider(env_file, key=config.credential_key),
            confirm or ConsoleConfirmation(key=config.credential_key),
        )
        return cls(dispatcher, recovery, inter_chunk_delay=config.inter_chunk_delay, sleep=sleep)

    @property
    def stats(self) -> RunStatistics:
        return self._aggregator.stats

    @property
    def recovery(self) -> CredentialRecoveryHandler:
        return self._recovery

    async def run_accounts(
        self,
        items: Sequence[WorkItem],
        *,
        planner: ChunkPlanner,
        builder: PayloadBuilder | None = None,
        max_items: int | None = None,
    ) -> RunStatistics:
        """Partition ``items`` into batches and dispatch each grouped payload.

        Args:
            items: Work items in dispatch order
            planner: Count-bounded chunk planner
            builder: Payload builder (default: no overrides, no size warning)
            max_items: Truncate the input to this many items before planning

        Returns:
            Final run statistics
        """
        builder = builder or PayloadBuilder()
        if max_items is not None and len(items) > max_items:
            logger.warning(
                f"Found {len(items)} accounts, but limiting to {max_items} accounts as configured."
            )
            items = items[:max_items]

        logger.info(f"Processing {len(items)} accounts total")
        chunks = planner.plan(items)
        total = len(chunks)

        for chunk in chunks:
            logger.info(
                f"Processing batch {chunk.chunk_index + 1} of {total} ({chunk.size} accounts)"
            )
            payload = builder.build(chunk)
            self._log_payload_shape(payload, builder)

            outcome = await self._dispatch(
                SyncVariant.ACCOUNTS, chunk.chunk_index, total, chunk.size, payload.to_wire()
            )
            self._aggregator.record_chunk(chunk, outcome)
            await self._pause(chunk.chunk_index, total)

        return self._finish(SyncVariant.ACCOUNTS)

    async def run_intervals(self, windows: Sequence[TimeWindow]) -> RunStatistics:
        """Dispatch one request per pre-computed time window."""
        total = len(windows)

        for index, window in enumerate(windows):
            logger.info(f"[{index + 1}/{total}] Processing interval: {window.label}")
            body = build_interval_request(window).to_wire()

            outcome = await self._dispatch(SyncVariant.INTERVALS, index, total, 1, body)
            self._aggregator.record_window(window, outcome, index)
            await self._pause(index, total)

        return self._finish(SyncVariant.INTERVALS)

    async def _dispatch(
        self,
        variant: SyncVariant,
        chunk_index: int,
        total_chunks: int,
        units: int,
        body: dict[str, Any],
    ) -> DispatchOutcome:
        log_chunk_started(
            variant=variant.value, chunk_index=chunk_index, total_chunks=total_chunks, units=units
        )
        started = perf_counter()
        try:
            outcome = await self._recovery.dispatch(self._dispatcher, body)
        except ValidationError:
            raise
        except Exception as e:
            logger.exception(f"Chunk {chunk_index + 1} failed with exception: {e}")
            outcome = DispatchOutcome.failed(body, describe_error(e))

        if outcome.success:
            logger.info(f"Chunk {chunk_index + 1} completed successfully: {outcome.message}")
            log_chunk_completed(
                variant=variant.value,
                chunk_index=chunk_index,
                units=units,
                attempts=outcome.attempts,
                latency_ms=(perf_counter() - started) * 1000.0,
            )
        else:
            logger.error(f"Chunk {chunk_index + 1} failed: {outcome.error}")
            log_chunk_error(
                variant=variant.value,
                chunk_index=chunk_index,
                units=units,
                error_message=outcome.error or "Unknown error",
                status_code=outcome.status_code,
            )
        return outcome

    def _log_payload_shape(self, payload: AssignmentPayload, builder: PayloadBuilder) -> None:
        logger.info(f"Grouped into {len(payload.groups)} impact groups")
        if payload.overrides:
            overrides = ", ".join(f"{key}: {value}" for key, value in payload.overrides.items())
            logger.info(f"API overrides: {overrides}")
        for group in payload.groups:
            logger.info(f"  - {group.group_slug}: {group.size} accounts")
        for group in builder.oversized_groups(payload):
            logger.warning(
                f"Group {group.group_slug} has {group.size} accounts, "
                f"which exceeds {builder.group_size_warning}!"
            )

    async def _pause(self, chunk_index: int, total_chunks: int) -> None:
        if chunk_index < total_chunks - 1 and self._inter_chunk_delay > 0:
            await self._sleep(self._inter_chunk_delay)

    def _finish(self, variant: SyncVariant) -> RunStatistics:
        stats = self._aggregator.finish()
        log_run_complete(variant=variant.value, stats=stats)
        return stats


def account_planning(config: AccountSyncConfig) -> tuple[ChunkPlanner, PayloadBuilder]:
    """Planner and payload builder for an account run."""
    planner = ChunkPlanner(ChunkPolicy(max_items=config.batch_size))
    builder = PayloadBuilder(
        max_accounts=config.api_max_accounts,
        batch_size=config.api_batch_size,
        group_size_warning=config.group_size_warning,
    )
    return planner, builder

"""PoW miner service for powstr.

Mines notes with a [Miner][powstr.nips.nip13.miner.Miner] driven in
batches from an ``async`` loop. After every batch the loop reports
progress and yields to the event loop, so a mining run never starves
other tasks and can be abandoned at any batch boundary, either through
[request_abort()][powstr.services.miner.PowMiner.request_abort] or by
cancelling the task.

The template's ``created_at`` is fixed once when mining starts, and
[mine_and_publish()][powstr.services.miner.PowMiner.mine_and_publish]
publishes that exact template, so the published event carries the mined
id and its strength.

See Also:
    [MinerConfig][powstr.services.miner.MinerConfig]: Attempt ceiling, batch
        size and note kind.
    [MINING_DURATION_SECONDS][powstr.core.metrics.MINING_DURATION_SECONDS]:
        Histogram observed after every run.

Examples:
    ```python
    miner = PowMiner(publisher=gateway)
    mined = await miner.mine_and_publish("gm", target=16, on_progress=print)
    if mined.event is not None:
        print(mined.event.id)
    ```
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, ClassVar, NamedTuple

from powstr.core.base_service import BaseService
from powstr.core.exceptions import PublishingError
from powstr.core.metrics import MINING_DURATION_SECONDS
from powstr.models.constants import ServiceName
from powstr.nips.event_builders import build_text_note
from powstr.nips.nip01 import compute_event_id
from powstr.nips.nip13 import Miner, MinerState, MiningProgress, MiningResult, format_strength

from .configs import MinerConfig


if TYPE_CHECKING:
    from collections.abc import Callable

    from powstr.models.event import Event
    from powstr.nips.nip13.miner import Hasher
    from powstr.services.common.types import EventPublisher


class MinedNote(NamedTuple):
    """Outcome of [mine_and_publish()][powstr.services.miner.PowMiner.mine_and_publish].

    Attributes:
        result: The mining result.
        event: The published event, or ``None`` unless the nonce was found.
    """

    result: MiningResult
    event: Event | None = None


class PowMiner(BaseService[MinerConfig]):
    """Mine and publish proof-of-work notes.

    Args:
        publisher: Collaborator signing and sending events. Its public key
            authors the mined notes.
        config: Service configuration.
        clock: Wall clock used for ``created_at``.
        hasher: Event id function passed to the [Miner][powstr.nips.nip13.miner.Miner].
    """

    SERVICE_NAME: ClassVar[ServiceName] = ServiceName.MINER
    CONFIG_CLASS: ClassVar[type[MinerConfig]] = MinerConfig

    def __init__(
        self,
        publisher: EventPublisher,
        config: MinerConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
        hasher: Hasher = compute_event_id,
    ) -> None:
        super().__init__(config=config)
        self._publisher = publisher
        self._clock = clock
        self._hasher = hasher
        self._abort_requested = False
        self._current: Miner | None = None

    @property
    def mining(self) -> bool:
        """Whether a mining run is in progress."""
        return self._current is not None

    @property
    def progress(self) -> MiningProgress | None:
        """Progress of the current run, or ``None`` when idle."""
        return self._current.progress if self._current is not None else None

    def request_abort(self) -> None:
        """Abort the current run at its next batch boundary."""
        if self._current is not None:
            self._abort_requested = True

    async def mine(
        self,
        content: str,
        target: int,
        *,
        on_progress: Callable[[MiningProgress], None] | None = None,
    ) -> MiningResult:
        """Mine a note until it reaches *target* bits, the ceiling, or an abort.

        Args:
            content: Note content.
            target: Required strength in bits.
            on_progress: Called with the miner's progress after every batch.

        Returns:
            The [MiningResult][powstr.nips.nip13.miner.MiningResult]; an
            ``EXHAUSTED`` or ``ABORTED`` state is an outcome, not an error.

        Raises:
            ValueError: If *target* is negative.
            RuntimeError: If a run is already in progress.
            asyncio.CancelledError: Re-raised after aborting the miner.
        """
        if self._current is not None:
            raise RuntimeError("a mining run is already in progress")

        template = build_text_note(
            content,
            pubkey=self._publisher.public_key,
            created_at=int(self._clock()),
            kind=self._config.kind,
        )
        miner = Miner(
            template,
            target,
            max_attempts=self._config.max_attempts,
            hasher=self._hasher,
        )
        self._current = miner
        self._abort_requested = False
        self._logger.info("mining_started", target=target, max_attempts=miner.max_attempts)

        try:
            while not miner.done:
                if self._abort_requested:
                    miner.abort()
                    break
                miner.step(self._config.batch_size)
                if on_progress is not None:
                    on_progress(miner.progress)
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            miner.abort()
            self._record(miner.result)
            raise
        finally:
            self._current = None
            self._abort_requested = False

        result = miner.result
        self._record(result)
        return result

    async def mine_and_publish(
        self,
        content: str,
        target: int,
        *,
        on_progress: Callable[[MiningProgress], None] | None = None,
    ) -> MinedNote:
        """Mine a note and publish it if the target was reached.

        Raises:
            PublishingError: If publishing failed or the relay-assigned id
                differs from the mined id.
        """
        result = await self.mine(content, target, on_progress=on_progress)
        if not result.found or result.event is None:
            return MinedNote(result)

        event = await self._publisher.publish(result.event)
        if event.id != result.event_id:
            raise PublishingError(f"published id {event.id} differs from mined id {result.event_id}")
        self.inc_counter("notes_published")
        self._logger.info("note_published", id=event.id, strength=format_strength(result.strength or 0))
        return MinedNote(result, event)

    def _record(self, result: MiningResult) -> None:
        self.inc_counter(f"mining_{result.state}")
        self.set_gauge("mining_attempts", result.attempts)
        if self._config.metrics.enabled:
            MINING_DURATION_SECONDS.labels(service=self.SERVICE_NAME, state=result.state).observe(
                result.elapsed
            )

        fields: dict[str, object] = {
            "state": result.state,
            "attempts": result.attempts,
            "elapsed": f"{result.elapsed:.3f}",
        }
        if result.state == MinerState.FOUND:
            fields.update(nonce=result.nonce, id=result.event_id, strength=result.strength)
            self._logger.info("mining_completed", **fields)
        else:
            self._logger.warning("mining_completed", **fields)

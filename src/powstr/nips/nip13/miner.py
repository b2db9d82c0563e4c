"""NIP-13 proof-of-work miner as an explicit, steppable state machine.

```text
IDLE --step()--> MINING --+--> FOUND       strength(id) >= target
                          +--> EXHAUSTED   max_attempts reached
                          +--> ABORTED     abort() called
```

The miner never blocks for longer than one [step()][powstr.nips.nip13.miner.Miner.step]
call, so any scheduler (a thread, an asyncio task, an event loop callback)
can drive it in batches, sample [progress][powstr.nips.nip13.miner.Miner.progress]
between batches, and abandon it at a batch boundary.

Examples:
    ```python
    template = UnsignedEvent(pubkey=pk, created_at=now, kind=1, content="gm")
    miner = Miner(template, target=16)
    while not miner.done:
        miner.step(10_000)
        print(miner.progress.attempts)
    result = miner.result
    ```

See Also:
    [PowMiner][powstr.services.miner.PowMiner]: Async driver that yields
        to the event loop between batches.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, NamedTuple

from powstr.nips.nip01 import compute_event_id

from .pow import strength


if TYPE_CHECKING:
    from powstr.models.event import UnsignedEvent


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1_000_000

Hasher = Callable[["UnsignedEvent"], str]


class MinerState(StrEnum):
    """Lifecycle state of a [Miner][powstr.nips.nip13.miner.Miner]."""

    IDLE = "idle"
    MINING = "mining"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset({MinerState.FOUND, MinerState.EXHAUSTED, MinerState.ABORTED})


class MiningProgress(NamedTuple):
    """Snapshot of a miner's progress.

    Attributes:
        attempts: Nonces tried so far.
        elapsed: Seconds since the first attempt (0.0 while idle).
        fraction: ``attempts / max_attempts``, in ``[0.0, 1.0]``.
    """

    attempts: int
    elapsed: float
    fraction: float


class MiningResult(NamedTuple):
    """Outcome of a mining run.

    Attributes:
        state: Final (or current) [MinerState][powstr.nips.nip13.miner.MinerState].
        attempts: Nonces tried.
        elapsed: Seconds spent mining.
        nonce: Winning nonce when ``state`` is ``FOUND``, else ``None``.
        event_id: Winning id when ``state`` is ``FOUND``, else ``None``.
        event: Winning template (carrying its ``nonce`` tag) when found.
        strength: Strength of the winning id, else ``None``.
    """

    state: MinerState
    attempts: int
    elapsed: float
    nonce: int | None = None
    event_id: str | None = None
    event: UnsignedEvent | None = None
    strength: int | None = None

    @property
    def found(self) -> bool:
        return self.state == MinerState.FOUND


class Miner:
    """Search for a nonce giving an event id of at least ``target`` leading zero bits.

    Each attempt sets ``["nonce", str(nonce), str(target)]`` on the template
    (replacing any previous ``nonce`` tag), hashes it with ``hasher`` and
    scores the id with [strength()][powstr.nips.nip13.pow.strength]. Nonces
    are tried in order ``0, 1, 2, ...`` up to ``max_attempts``.

    Args:
        template: Event to mine; every field except the ``nonce`` tag is kept.
        target: Required strength in bits.
        max_attempts: Attempt ceiling, fixed for the lifetime of the miner.
        hasher: Content-hash function; defaults to NIP-01
            [compute_event_id()][powstr.nips.nip01.compute_event_id].
        clock: Monotonic clock used for elapsed-time reporting.

    Raises:
        ValueError: If ``target`` is negative or ``max_attempts`` is below 1.
    """

    def __init__(
        self,
        template: UnsignedEvent,
        target: int,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        hasher: Hasher = compute_event_id,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self._template = template
        self._target = target
        self._max_attempts = max_attempts
        self._hasher = hasher
        self._clock = clock

        self._state = MinerState.IDLE
        self._attempts = 0
        self._started_at: float | None = None
        self._finished_at: float | None = None
        self._winner: tuple[int, str, UnsignedEvent, int] | None = None

    @property
    def state(self) -> MinerState:
        return self._state

    @property
    def done(self) -> bool:
        """Whether the miner reached a terminal state."""
        return self._state.is_terminal

    @property
    def target(self) -> int:
        return self._target

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self._clock()
        return end - self._started_at

    @property
    def progress(self) -> MiningProgress:
        """Current progress; safe to sample in any state."""
        return MiningProgress(
            attempts=self._attempts,
            elapsed=self.elapsed,
            fraction=min(1.0, self._attempts / self._max_attempts),
        )

    @property
    def result(self) -> MiningResult:
        """Summary of the run so far (final once [done][powstr.nips.nip13.miner.Miner.done])."""
        if self._winner is None:
            return MiningResult(self._state, self._attempts, self.elapsed)
        nonce, event_id, event, bits = self._winner
        return MiningResult(
            self._state,
            self._attempts,
            self.elapsed,
            nonce=nonce,
            event_id=event_id,
            event=event,
            strength=bits,
        )

    def candidate(self, nonce: int) -> UnsignedEvent:
        """Return the template carrying the ``nonce`` tag for *nonce*."""
        return self._template.with_tag(["nonce", str(nonce), str(self._target)])

    def step(self, batch: int = 1) -> MinerState:
        """Perform up to *batch* attempts and return the resulting state.

        Calling ``step()`` on a terminal miner does nothing.

        Raises:
            ValueError: If ``batch`` is below 1.
        """
        if batch < 1:
            raise ValueError(f"batch must be at least 1, got {batch}")
        if self.done:
            return self._state

        if self._state == MinerState.IDLE:
            self._state = MinerState.MINING
            self._started_at = self._clock()
            logger.debug(
                "mining_started target=%s max_attempts=%s", self._target, self._max_attempts
            )

        end = min(self._attempts + batch, self._max_attempts)
        while self._attempts < end:
            nonce = self._attempts
            candidate = self.candidate(nonce)
            event_id = self._hasher(candidate)
            bits = strength(event_id)
            self._attempts += 1
            if bits >= self._target:
                self._winner = (nonce, event_id, candidate, bits)
                self._finish(MinerState.FOUND)
                logger.debug(
                    "mining_found nonce=%s strength=%s attempts=%s", nonce, bits, self._attempts
                )
                return self._state

        if self._attempts >= self._max_attempts:
            self._finish(MinerState.EXHAUSTED)
            logger.debug("mining_exhausted attempts=%s", self._attempts)
        return self._state

    def abort(self) -> None:
        """Abandon a miner that has not reached a terminal state."""
        if self.done:
            return
        self._finish(MinerState.ABORTED)
        logger.debug("mining_aborted attempts=%s", self._attempts)

    def run(self, batch: int = 10_000) -> MiningResult:
        """Step the miner to a terminal state and return its result."""
        while not self.done:
            self.step(batch)
        return self.result

    def _finish(self, state: MinerState) -> None:
        self._state = state
        self._finished_at = self._clock() if self._started_at is not None else None

"""Nostr Implementation Possibilities -- protocol-specific logic.

The NIPs layer sits in the middle of the diamond DAG, depending only on
[powstr.models][powstr.models]. Apart from the ``nostr_sdk`` builder
conversion in [event_builders][powstr.nips.event_builders], everything here
is pure computation over in-memory events.

Attributes:
    nip01: Event id computation through ``nostr_sdk``.
    nip13: Proof-of-work strength, display helpers and the
        [Miner][powstr.nips.nip13.miner.Miner] state machine.
    nip22: Comment tag codec and the
        [CommentThread][powstr.nips.nip22.thread.CommentThread] resolver.
    event_builders: Comment and note templates and their ``EventBuilder``
        conversion.

See Also:
    [powstr.services][powstr.services]: Services that feed relay results
        into these modules.
"""

from powstr.nips.event_builders import build_comment, build_text_note, to_event_builder
from powstr.nips.nip01 import compute_event_id, to_nostr_tags
from powstr.nips.nip13 import Miner, MinerState, MiningResult, strength
from powstr.nips.nip22 import CommentThread, comment_filter, comment_tags, matches_root


__all__ = [
    "CommentThread",
    "Miner",
    "MinerState",
    "MiningResult",
    "build_comment",
    "build_text_note",
    "comment_filter",
    "comment_tags",
    "compute_event_id",
    "matches_root",
    "strength",
    "to_event_builder",
    "to_nostr_tags",
]

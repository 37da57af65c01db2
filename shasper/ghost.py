"""LMD-GHOST fork choice over an archive of every imported block."""

from __future__ import annotations

from typing import (
    Any,
    Generic,
    Hashable,
    Iterable,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
)

BlockId = TypeVar("BlockId", bound=Hashable)
ValidatorIndex = TypeVar("ValidatorIndex", bound=Hashable)


class ChainQuery(Protocol):
    """Read access to a block tree.

    Blocks returned by ``block_at`` expose ``parent_id()``, which is None for
    the genesis block. Lookups of unknown blocks raise the backend's error.
    """

    def genesis(self) -> Any: ...

    def head(self) -> Any: ...

    def contains(self, block_id: Any) -> bool: ...

    def is_canon(self, block_id: Any) -> bool: ...

    def lookup_canon_depth(self, depth: int) -> Optional[Any]: ...

    def auxiliary(self, key: Any) -> Optional[Any]: ...

    def depth_at(self, block_id: Any) -> int: ...

    def children_at(self, block_id: Any) -> list[Any]: ...

    def state_at(self, block_id: Any) -> Any: ...

    def block_at(self, block_id: Any) -> Any: ...


class JustifiableExecutor(Protocol):
    """An executor that can report justification data and fork-choice votes."""

    def justified_active_validators(self, state: Any) -> list[Any]: ...

    def justified_block_id(self, state: Any) -> Optional[Any]: ...

    def votes(self, block: Any, state: Any) -> list[tuple[Any, Any]]: ...


class NoCacheAncestorQuery:
    """Find ancestors by walking parent links one block at a time."""

    def __init__(self, backend: ChainQuery) -> None:
        self._backend = backend

    def ancestor_at(self, block_id: Any, depth: int) -> Any:
        """Return the ancestor of ``block_id`` at ``depth``.

        A block at or above ``depth`` is its own answer.
        """
        current = block_id
        while self._backend.depth_at(current) > depth:
            parent = self._backend.block_at(current).parent_id()
            if parent is None:
                raise LookupError(
                    f"block {current!r} has no parent but lies deeper than {depth}"
                )
            current = parent
        return current


class ArchiveGhost(Generic[ValidatorIndex, BlockId]):
    """Latest-message-driven GHOST over a backend that can answer ancestor queries.

    Votes are staged in an overlay first and only become permanent once
    ``commit_overlay`` is called; staged votes take precedence when counting.
    """

    def __init__(self, backend: Any) -> None:
        self._backend = backend
        self._votes: dict[ValidatorIndex, BlockId] = {}
        self._overlayed_votes: dict[ValidatorIndex, BlockId] = {}

    @property
    def backend(self) -> Any:
        """The chain backend the fork choice reads from."""
        return self._backend

    @property
    def votes(self) -> dict[ValidatorIndex, BlockId]:
        """A copy of the committed latest votes."""
        return dict(self._votes)

    @property
    def overlayed_votes(self) -> dict[ValidatorIndex, BlockId]:
        """A copy of the staged, uncommitted votes."""
        return dict(self._overlayed_votes)

    def update_overlay(self, validator_id: ValidatorIndex, target_root: BlockId) -> None:
        """Stage a validator's latest vote."""
        self._overlayed_votes[validator_id] = target_root

    def commit_overlay(self) -> None:
        """Make all staged votes permanent and clear the overlay."""
        overlay, self._overlayed_votes = self._overlayed_votes, {}
        self._votes.update(overlay)

    def reset_overlay(self) -> None:
        """Discard all staged votes."""
        self._overlayed_votes = {}

    def update_active(self, active_validators: Iterable[ValidatorIndex]) -> None:
        """Drop committed votes of validators that are no longer active."""
        active = set(active_validators)
        self._votes = {v: t for v, t in self._votes.items() if v in active}

    def vote_count(self, block_id: BlockId, block_depth: int) -> int:
        """Count the votes whose target descends from ``block_id`` at ``block_depth``."""
        total = sum(
            1
            for target in self._overlayed_votes.values()
            if self._backend.ancestor_at(target, block_depth) == block_id
        )
        total += sum(
            1
            for validator, target in self._votes.items()
            if validator not in self._overlayed_votes
            and self._backend.ancestor_at(target, block_depth) == block_id
        )
        return total

    def head(self, justified: BlockId) -> BlockId:
        """Walk from ``justified`` down to a leaf, following the heaviest child.

        On a tie the earliest child listed by the backend wins.
        """
        head = justified
        head_depth = self._backend.depth_at(justified)
        while True:
            children: Sequence[BlockId] = self._backend.children_at(head)
            if not children:
                return head
            best = children[0]
            best_score = 0
            for child in children:
                score = self.vote_count(child, head_depth + 1)
                if score > best_score:
                    best, best_score = child, score
            head = best
            head_depth += 1
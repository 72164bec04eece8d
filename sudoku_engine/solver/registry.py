"""Immutable lookup of propagation strategies by one-character key."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .strategies import (
    CandidateReductionStrategy,
    HiddenPairStrategy,
    SudokuStrategy,
    UniqueCandidateStrategy,
)


class StrategyRegistry(Mapping[str, SudokuStrategy]):
    """
    Read-only mapping from strategy key to strategy instance.

    A selection string picks the strategies and the order they run in.
    """

    def __init__(self, strategies: Iterable[SudokuStrategy]):
        table: dict[str, SudokuStrategy] = {}
        for strategy in strategies:
            if len(strategy.key) != 1:
                raise ValueError(f"Strategy key must be one character: {strategy!r}")
            if strategy.key in table:
                raise ValueError(f"Duplicate strategy key: {strategy.key!r}")
            table[strategy.key] = strategy
        self._table = MappingProxyType(table)

    def __getitem__(self, key: str) -> SudokuStrategy:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def resolve(self, selection: str | None) -> list[SudokuStrategy]:
        """
        Turn a selection string into the strategies to run.

        Unknown characters are ignored and a repeated key keeps its first
        position.

        Args:
            selection: e.g. "ru"; empty or None selects nothing

        Returns:
            Selected strategies in selection order
        """
        if not selection:
            return []
        return [self._table[key] for key in dict.fromkeys(selection) if key in self._table]

    def normalize(self, selection: str | None) -> str:
        """Canonical form of a selection string, e.g. "hxrh" -> "hr"."""
        return "".join(strategy.key for strategy in self.resolve(selection))

    def describe(self) -> list[dict[str, str]]:
        """Key, name and description of every registered strategy."""
        return [
            {"key": s.key, "name": s.name, "description": s.description}
            for s in self._table.values()
        ]


DEFAULT_REGISTRY = StrategyRegistry(
    [
        CandidateReductionStrategy(),
        UniqueCandidateStrategy(),
        HiddenPairStrategy(),
    ]
)

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Generic, Iterable, Optional, TypeVar

from ..ledger.merge import fragment_for, merge_fragments
from ..ledger.model import ProgressFragment

T = TypeVar("T")


class SourceAdapter(ABC, Generic[T]):
    """Strategy Pattern: translate one evidence stream into ledger credits.

    Adapters are pure; re-running them over the same evidence yields the same
    fragment, so backfill only ever adds credits.
    """

    @abstractmethod
    def credit_for(self, record: T) -> Optional[tuple[date, str]]:
        """Return (date, activity_id) credited by one record, or None."""

        raise NotImplementedError

    def to_fragment(self, records: Iterable[T]) -> ProgressFragment:
        fragments = []
        for record in records:
            credit = self.credit_for(record)
            if credit is None:
                continue
            on, activity_id = credit
            fragments.append(fragment_for(on, activity_id))
        return merge_fragments(fragments)

"""Insertion-ordered collection of library records keyed by identity."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord


class RecordSet:
    """Library records keyed by artifact identity.

    Iteration follows first-seen order so that a rewritten manifest keeps
    the original ordering of untouched entries.
    """

    def __init__(self, records: Optional[Iterable[LibraryRecord]] = None) -> None:
        self._records: dict[ArtifactIdentity, LibraryRecord] = {}
        for record in records or ():
            self.add(record)

    def add(self, record: LibraryRecord) -> None:
        """Insert a record, overwriting any record with the same identity.

        An overwritten record keeps its original position.
        """
        self._records[record.artifact_id] = record

    def find(
        self, identity: ArtifactIdentity, exact: bool = True
    ) -> Optional[LibraryRecord]:
        """Find the first record whose identity matches.

        Args:
            identity: Identity to look up.
            exact: Require an exact version match. When False, wildcard
                versions on either side match any version.

        Returns:
            The matching record, or None if there is none.
        """
        if exact:
            return self._records.get(identity)
        for record in self._records.values():
            if record.artifact_id.matches(identity, exact=False):
                return record
        return None

    def contains(self, identity: ArtifactIdentity, exact: bool = False) -> bool:
        return self.find(identity, exact=exact) is not None

    def not_listed_in(
        self, other: RecordSet, exact: bool = False
    ) -> list[LibraryRecord]:
        """Return records of this set that have no match in ``other``.

        Resolved identities never carry wildcard versions, so the default
        wildcard-aware comparison is exact between two resolved sets.

        Args:
            other: Set to compare against.
            exact: Require exact version matches.

        Returns:
            Unmatched records in this set's order.
        """
        return [
            record
            for record in self._records.values()
            if not other.contains(record.artifact_id, exact=exact)
        ]

    def identities(self) -> list[ArtifactIdentity]:
        return list(self._records)

    def __iter__(self) -> Iterator[LibraryRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    def __repr__(self) -> str:
        return f"RecordSet({[str(identity) for identity in self._records]})"

"""Utility for resolving entry references to entries."""

from ledgerbook.domain.entities import Entry
from ledgerbook.domain.entry import EntryService
from ledgerbook.domain.errors import NotFoundError, entry_not_found


def resolve_entry(entry_service: EntryService, reference: str) -> Entry:
    """Resolve a full entry ID or a receipt number to an entry.

    Receipt numbers are the last five characters of an ID, so a reference
    that is not a full ID is matched against ID suffixes.

    Raises:
        NotFoundError: If nothing matches or the suffix is ambiguous
    """
    reference = reference.strip()
    entry = entry_service.get_entry(reference)
    if entry is not None:
        return entry

    matches = [e for e in entry_service.list_entries() if reference and e.id.endswith(reference)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise NotFoundError(
            f"Reference '{reference}' matches {len(matches)} entries; use the full ID"
        )
    raise NotFoundError(entry_not_found(reference))

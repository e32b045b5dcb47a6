"""Local candidate search over contacts and owned accounts."""

from collections.abc import Sequence

from recipient_resolver.lib.store import Contact, OwnedAccount
from recipient_resolver.schemas.recipient import Candidate, CandidateSource


def contact_candidate(contact: Contact) -> Candidate:
    return Candidate(
        name=contact.name,
        address=contact.address,
        tag=contact.destination_tag,
        source=CandidateSource.CONTACT,
    )


def account_candidate(account: OwnedAccount) -> Candidate:
    return Candidate(name=account.label, address=account.address, source=CandidateSource.ACCOUNT)


def _matches(needle: str, *fields: str) -> bool:
    return any(needle in (field or "").lower() for field in fields)


def search_local(
    contacts: Sequence[Contact],
    accounts: Sequence[OwnedAccount],
    query: str,
    exclude_address: str | None = None,
) -> list[Candidate]:
    """Case-insensitive substring search across contacts and owned accounts.

    Contacts match on name or address, accounts on label or address.  The
    two collections are searched independently, so an address present in
    both yields two candidates (contacts first); de-duplication is left to
    the caller.

    Args:
        contacts: Contact snapshot.
        accounts: Owned account snapshot.
        query: Search text.
        exclude_address: Sending account address, never returned from the
            account collection.

    Returns:
        Matching candidates, contacts before accounts, each in snapshot order.
    """
    needle = query.lower()

    results = [contact_candidate(c) for c in contacts if _matches(needle, c.name, c.address)]
    results.extend(
        account_candidate(a)
        for a in accounts
        if a.address != exclude_address and _matches(needle, a.label, a.address)
    )
    return results

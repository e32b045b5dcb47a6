"""Recipient CLI commands: classify input, search candidates, validate a destination."""

import asyncio

import typer

from recipient_resolver.lib.codec import classify
from recipient_resolver.schemas.decision import DecisionOutcome
from recipient_resolver.schemas.recipient import Candidate


def classify_cmd(
    text: str = typer.Argument(..., help="Text to classify"),
    tag: int | None = typer.Option(None, "--tag", help="Destination tag supplied with the text"),
) -> None:
    """Classify text as a classic address, an X-address or plain text."""
    result = classify("".join(text.split()), tag_hint=tag)
    typer.echo(f"Kind:    {result.kind}")
    if result.is_address:
        typer.echo(f"Address: {result.address}")
        typer.echo(f"Tag:     {result.tag if result.tag is not None else '-'}")


def search_cmd(
    text: str = typer.Argument(..., help="Name, address or search text"),
    source: str = typer.Option(..., "--source", help="Sending account address (excluded from results)"),
    store: str | None = typer.Option(None, "--store", help="JSON snapshot of contacts and accounts"),
) -> None:
    """Search contacts, own accounts and the directory for recipients."""
    asyncio.run(_search(text, source, store))


def validate_cmd(
    address: str = typer.Argument(..., help="Destination address"),
    source: str = typer.Option(..., "--source", help="Sending account address"),
    amount: str = typer.Option(..., "--amount", help="Payment amount"),
    iou: bool = typer.Option(False, "--iou", help="Paying an issued currency"),  # noqa: FBT001
    tag: int | None = typer.Option(None, "--tag", help="Destination tag"),
) -> None:
    """Validate a destination once and print the decision."""
    outcome = asyncio.run(_validate(address, source, amount, iou, tag))
    _echo_outcome(outcome)
    if outcome.blocks_progress:
        raise typer.Exit(code=1)


async def _search(text: str, source: str, store_path: str | None) -> None:
    """Async implementation of the search command."""
    from recipient_resolver.core.config import get_settings
    from recipient_resolver.lib.store import InMemoryAccountStore, load_store_from_json
    from recipient_resolver.services.session_service import RecipientSession

    settings = get_settings()
    path = store_path or settings.store_path
    store = load_store_from_json(path) if path else InMemoryAccountStore()

    session = RecipientSession.from_settings(settings, source_address=source, store=store)
    await session.on_text_changed(text)
    state = await session.wait_for_search()

    if not state.results:
        typer.echo("No results")
        return

    typer.echo(f"Results ({len(state.results)}):")
    for candidate in state.results:
        typer.echo(_format_candidate(candidate))


async def _validate(address: str, source: str, amount: str, iou: bool, tag: int | None) -> DecisionOutcome:
    """Async implementation of the validate command."""
    from recipient_resolver.core.config import get_settings
    from recipient_resolver.lib.ledger import RippledLedgerInfoSource
    from recipient_resolver.schemas.recipient import Destination
    from recipient_resolver.services.validation_service import DestinationValidator

    settings = get_settings()
    ledger = RippledLedgerInfoSource(
        node_url=settings.ledger_node_url,
        advisory_url=settings.backend_base_url,
        timeout=settings.ledger_timeout,
    )
    validator = DestinationValidator(ledger, activation_reserve=settings.activation_reserve)
    destination = Destination(address=address, tag=tag)
    return await validator.validate(destination, source, amount, iou)


def _format_candidate(candidate: Candidate) -> str:
    name = candidate.name or "(no name)"
    tag = f"  tag={candidate.tag}" if candidate.tag is not None else ""
    return f"  [{candidate.source}] {name}  {candidate.address}{tag}"


def _echo_outcome(outcome: DecisionOutcome) -> None:
    typer.echo(f"Outcome: {outcome.kind}")
    typer.echo(f"  Category: {outcome.category}")
    if outcome.message_key:
        typer.echo(f"  Message:  {outcome.message_key}")
    if outcome.actions:
        typer.echo(f"  Actions:  {', '.join(outcome.actions)}")
    if outcome.amount is not None:
        typer.echo(f"  Amount:   {outcome.amount}")

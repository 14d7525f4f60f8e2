"""
Command-Line Interface for commitment-based age proofs

Generate proofs locally, verify them, run the full flow, or serve the
verification endpoint.
"""

import json
import logging
import sys
import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from zk_age_proof import DISCLAIMER, __version__, print_disclaimer
from zk_age_proof.age_protocol import (
    ConfigurationError,
    InvalidDateError,
    NotEligibleError,
    VerificationPolicy,
    describe_disclosure,
    generate_proof,
    to_public_proof,
)
from zk_age_proof.age_protocol.dates import format_human, from_epoch_ms, parse_instant
from zk_age_proof.age_protocol.verifier import (
    ClaimOnlyVerification,
    RecomputedVerification,
    verify_proof,
)

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1

console = Console()


def _parse_now(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_instant(value)
    except ValueError:
        raise click.BadParameter(f"not an ISO 8601 timestamp: {value}")


def _policy(replay_window_ms):
    try:
        return VerificationPolicy.from_settings(replay_window_ms=replay_window_ms)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--replay-window-ms")


def _render_result(result, title="Verification Result"):
    style = "green" if result.is_valid else "red"
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Decision", f"[{style}]{'ACCEPTED' if result.is_valid else 'REJECTED'}[/{style}]")
    table.add_row("Message", result.message)
    table.add_row("Mode", result.mode.value)
    if result.proof_details is not None:
        details = result.proof_details
        table.add_row("Commitment", details.commitment)
        table.add_row("Expected commitment", details.expected_commitment)
        table.add_row("Commitment matches", str(details.commitment_matches))
        table.add_row("Age claim valid", str(details.age_valid))
    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def main(verbose):
    """
    Commitment-based age proofs (proof of concept).

    Prove that a private birth date implies age >= 18 without sending the
    date. The verifier only sees a salted commitment, the age flag and a
    timestamp.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option('--birth-date', required=True, help='Birth date (YYYY-MM-DD)')
@click.option('--now', callback=_parse_now, help='Override current time (ISO 8601)')
@click.option('--output', type=click.Path(dir_okay=False), help='Write public proof JSON to file')
@click.option('--show-private', is_flag=True, help='Also print the private record (includes the salt)')
def generate(birth_date, now, output, show_private):
    """
    Generate a proof locally and print the public artifact.

    Examples:

        age-proof generate --birth-date 1990-05-01

        age-proof generate --birth-date 1990-05-01 --output proof.json
    """
    try:
        private_proof = generate_proof(birth_date, now=now)
    except InvalidDateError as e:
        raise click.BadParameter(str(e), param_hint='--birth-date')

    if not private_proof.age_proof:
        click.echo(click.style("✗ You must be 18 or older to continue", fg="red"), err=True)
        sys.exit(EXIT_REJECTED)

    public_json = json.dumps(to_public_proof(private_proof).to_dict(), indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(public_json + "\n")
        click.echo(click.style(f"✓ Public proof written to {output}", fg="green"), err=True)
    else:
        click.echo(public_json)

    if show_private:
        click.echo(click.style("\nPRIVATE RECORD - do not share:", fg="yellow", bold=True), err=True)
        click.echo(json.dumps(private_proof.to_dict(), indent=2), err=True)


@main.command()
@click.argument('proof_file', type=click.File('r'), default='-')
@click.option('--known-date', help='Original birth date (recomputed verification)')
@click.option('--salt', help='Original salt (recomputed verification)')
@click.option('--now', callback=_parse_now, help='Override current time (ISO 8601)')
@click.option('--replay-window-ms', type=int, help='Maximum accepted proof age in milliseconds')
@click.option(
    '--format',
    'output_format',
    type=click.Choice(['console', 'json'], case_sensitive=False),
    default='console',
    help='Output format'
)
def verify(proof_file, known_date, salt, now, replay_window_ms, output_format):
    """
    Verify a public proof read from PROOF_FILE (default: stdin).

    Without --known-date/--salt only the claimed age flag can be checked.
    """
    if (known_date is None) != (salt is None):
        raise click.UsageError("--known-date and --salt must be given together")

    try:
        payload = json.load(proof_file)
    except ValueError as e:
        raise click.BadParameter(f"proof is not valid JSON: {e}", param_hint='PROOF_FILE')

    policy = _policy(replay_window_ms)
    if known_date is not None:
        request = RecomputedVerification(known_date=known_date, salt=salt)
    else:
        request = ClaimOnlyVerification()

    try:
        result = verify_proof(payload, request, now=now, policy=policy)
    except InvalidDateError as e:
        raise click.BadParameter(str(e), param_hint='--known-date')

    if output_format == 'json':
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _render_result(result)
        if isinstance(request, ClaimOnlyVerification):
            console.print(f"[dim]{DISCLAIMER}[/dim]")

    sys.exit(EXIT_ACCEPTED if result.is_valid else EXIT_REJECTED)


@main.command()
@click.option('--birth-date', required=True, help='Birth date (YYYY-MM-DD)')
@click.option('--now', callback=_parse_now, help='Override current time (ISO 8601)')
def demo(birth_date, now):
    """
    Run the full flow in-process: generate, submit, render the decision.
    """
    from zk_age_proof.transport.client import AgeProofClient, InProcessTransport

    clock = (lambda: now) if now is not None else None
    client = AgeProofClient(InProcessTransport(clock=clock))

    console.print(Panel.fit("Age Proof Demo", style="cyan"))
    try:
        submission = client.prove_and_submit(birth_date, now=now)
    except InvalidDateError as e:
        raise click.BadParameter(str(e), param_hint='--birth-date')
    except NotEligibleError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(EXIT_REJECTED)

    console.print("[bold]1. Public proof sent to verifier[/bold]")
    console.print_json(json.dumps(submission.public_proof.to_dict()))
    generated_at = from_epoch_ms(submission.public_proof.timestamp)
    console.print(f"[dim]Generated at {format_human(generated_at)}[/dim]")

    response = submission.response
    style = "green" if response.is_valid else "red"
    console.print("[bold]2. Verifier response[/bold]")
    console.print(f"[{style}]{response.message}[/{style}] ({response.timestamp})")

    disclosure = describe_disclosure(
        submission.private_proof, submission.public_proof, response
    )
    table = Table(title="What was disclosed")
    table.add_column("What you proved")
    table.add_column("Sent")
    table.add_column("NOT sent")
    table.add_column("Verifier learned")
    table.add_row(
        f'"{disclosure.proved}"',
        ", ".join(disclosure.sent_fields),
        ", ".join(disclosure.withheld),
        ", ".join(disclosure.verifier_learned),
    )
    console.print(table)

    sys.exit(EXIT_ACCEPTED if response.is_valid else EXIT_REJECTED)


@main.command()
@click.option('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
@click.option('--port', type=int, default=8000, help='Port (default: 8000)')
@click.option('--log-level', default='info', help='uvicorn log level')
def serve(host, port, log_level):
    """Serve the verification endpoint over HTTP."""
    import uvicorn

    click.echo(click.style(f"Serving verifier on http://{host}:{port}", fg="cyan"))
    uvicorn.run("zk_age_proof.transport.api:app", host=host, port=port, log_level=log_level)


@main.command()
def version():
    """Show version information."""
    click.echo(f"zk-age-proof version {__version__}")
    print_disclaimer()


if __name__ == '__main__':
    main()

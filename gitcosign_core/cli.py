"""
gitcosign_core.cli
------------------
Command line entry point (``gitcosign``).

    gitcosign review [COMMIT_REF]        print the aggregated signature status
    gitcosign sign KEY_ID [COMMIT_REF]   co-sign a commit, print the new object id
"""

from __future__ import annotations
import json, os
from typing import Optional
import typer
from .backends import object_store_factory, signer_factory, verifier_factory
from .errors import ConfigError, CosignError
from .keyrings import load_keyring_config
from .logger import get_logger
from .review import render_status, review_commit
from .signing import sign_commit
from .utils import env_flag

log = get_logger("gitcosign.cli")

app = typer.Typer(add_completion=False, help="Co-sign git commits and review their signatures.")

EXIT_INVALID = 2


def _max_workers() -> Optional[int]:
    value = os.getenv("GITCOSIGN_MAX_WORKERS")
    if not value:
        return None
    try:
        workers = int(value)
    except ValueError:
        raise ConfigError(f"GITCOSIGN_MAX_WORKERS must be an integer, got {value!r}")
    if workers < 1:
        raise ConfigError("GITCOSIGN_MAX_WORKERS must be at least 1")
    return workers


@app.command()
def review(
    commit_ref: str = typer.Argument("HEAD"),
    keyrings: Optional[str] = typer.Option(None, "--keyrings", help="Keyring configuration JSON file."),
    as_json: bool = typer.Option(False, "--json", help="Print the status as JSON."),
    require_signature: bool = typer.Option(
        False,
        "--require-signature",
        help="Treat commits without a verifiable signature as invalid (also GITCOSIGN_REQUIRE_SIGNATURE=1).",
    ),
):
    """Verify COMMIT_REF against every configured keyring."""
    require_signature = require_signature or env_flag("GITCOSIGN_REQUIRE_SIGNATURE")
    try:
        report = review_commit(
            commit_ref,
            store=object_store_factory(),
            verifier=verifier_factory(),
            keyrings=load_keyring_config(keyrings),
            require_signature=require_signature,
            max_workers=_max_workers(),
        )
    except CosignError as e:
        log.error(f"[REVIEW] {commit_ref}: {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=4))
    else:
        typer.echo(render_status(report))

    if not report.valid:
        raise typer.Exit(code=EXIT_INVALID)


@app.command()
def sign(
    key_id: str = typer.Argument(..., help="Signing key passed to gpg --default-key."),
    commit_ref: str = typer.Argument("HEAD"),
):
    """Add a signature by KEY_ID to COMMIT_REF, keeping existing signatures."""
    try:
        object_id = sign_commit(commit_ref, key_id, store=object_store_factory(), signer=signer_factory())
    except CosignError as e:
        log.error(f"[SIGN] {commit_ref}: {e}")
        raise typer.Exit(code=1)
    typer.echo(object_id)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

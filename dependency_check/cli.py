"""Typer CLI for the pull request dependency check."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import httpx
import typer

from dependency_check.context import resolve_repository_context
from dependency_check.github_client import (
    GitHubApiError,
    GitHubAuthError,
    GitHubDependencyLookup,
    build_github_client,
    fetch_authenticated_user_login,
    fetch_pull_request_state,
    get_github_token_with_source,
)
from dependency_check.observability import configure_logging
from dependency_check.output import (
    ALL_RESOLVED_MESSAGE,
    format_workflow_error,
    render_failure_message,
)
from dependency_check.runner import run_dependency_check

app = typer.Typer(help="Fail a pull request while the issues and PRs it depends on are open.")


def report_failure(message: str) -> None:
    """Print a failure message, plus a workflow error command inside GitHub Actions."""
    typer.echo(message, err=True)
    if os.getenv("GITHUB_ACTIONS") == "true":
        typer.echo(format_workflow_error(message))


@app.command("check")
def check_command(
    repo: Annotated[
        str | None,
        typer.Option(help="Repository in owner/repo format. Defaults to GITHUB_REPOSITORY."),
    ] = None,
    pr: Annotated[
        int | None,
        typer.Option(help="Pull request number. Defaults to the GITHUB_EVENT_PATH payload."),
    ] = None,
    body_file: Annotated[
        Path | None,
        typer.Option(help="Read the PR body from this file instead of the GitHub API."),
    ] = None,
    timeout_seconds: Annotated[
        int, typer.Option(help="GitHub API timeout in seconds for each request.")
    ] = 20,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
    quiet: Annotated[bool, typer.Option(help="Only print warnings and the final result.")] = False,
) -> None:
    """Check that every dependency listed in the PR body is resolved."""
    configure_logging(quiet=quiet)
    try:
        context = resolve_repository_context(repo_full_name=repo, pr_number=pr)
        with build_github_client(timeout_seconds=timeout_seconds, trust_env=trust_env) as client:
            if body_file is not None:
                body = body_file.read_text(encoding="utf-8")
            else:
                body = fetch_pull_request_state(
                    client=client,
                    owner=context.owner,
                    repo=context.repo,
                    number=context.pr_number,
                ).body
            outcome = run_dependency_check(
                body=body,
                context=context,
                lookup=GitHubDependencyLookup(client),
            )
    except Exception as error:
        report_failure(f"Dependency check failed: {error}")
        raise

    if not outcome.passed:
        report_failure(render_failure_message(outcome))
        raise typer.Exit(code=1)

    typer.echo(ALL_RESOLVED_MESSAGE)


@app.command("auth-check")
def auth_check_command(
    timeout_seconds: Annotated[
        int, typer.Option(help="GitHub API timeout in seconds for the validation call.")
    ] = 20,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
) -> None:
    """Validate GitHub token setup."""
    try:
        _token, token_source = get_github_token_with_source()
    except GitHubAuthError as error:
        typer.echo(f"GitHub auth check failed: {error}")
        raise typer.Exit(code=1) from error

    typer.echo(f"Token detected in {token_source}.")

    try:
        with build_github_client(timeout_seconds=timeout_seconds, trust_env=trust_env) as client:
            login = fetch_authenticated_user_login(client=client)
    except GitHubApiError as error:
        typer.echo(
            "GitHub auth check failed: "
            f"status={error.status_code} endpoint={error.endpoint}."
        )
        raise typer.Exit(code=1) from error
    except httpx.HTTPError as error:
        typer.echo(f"GitHub auth check failed: network error ({error}).")
        raise typer.Exit(code=1) from error

    typer.echo(f"Authenticated as GitHub user '{login}'.")
    typer.echo("GitHub token setup is valid.")

"""Failure and success message rendering."""

from __future__ import annotations

from dependency_check.schema import RunOutcome

UNRESOLVED_BANNER = "The following issues need to be resolved before this PR can be merged:"
ALL_RESOLVED_MESSAGE = "All dependencies have been resolved!"


def render_failure_message(outcome: RunOutcome) -> str:
    """Render the banner followed by one line per unresolved dependency."""
    lines = ["", UNRESOLVED_BANNER, ""]
    lines.extend(f"#{entity.number} - {entity.title}" for entity in outcome.unresolved)
    return "\n".join(lines)


def escape_workflow_command_data(message: str) -> str:
    """Escape a message for use as GitHub Actions workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_workflow_error(message: str) -> str:
    """Format a message as a GitHub Actions ``::error::`` command."""
    return f"::error::{escape_workflow_command_data(message)}"

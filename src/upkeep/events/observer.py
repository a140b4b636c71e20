from __future__ import annotations

from typing import Protocol

import typer

from upkeep.events.types import (
    BaseBranchesResolved,
    BaseBranchSkipped,
    BranchesSorted,
    Event,
    ExtractCompleted,
    LookupCompleted,
    PhaseCompleted,
)


class EventObserver(Protocol):
    def on_event(self, event: Event) -> None: ...


class StdoutObserver:
    def on_event(self, event: Event) -> None:
        if isinstance(event, BaseBranchesResolved):
            typer.echo(f"[Repository] Base branches: {', '.join(event.base_branches) or '(none)'}")
        elif isinstance(event, BaseBranchSkipped):
            typer.echo(f"  [Branch] Skipped: {event.base_branch} ({event.reason})")
        elif isinstance(event, ExtractCompleted):
            label = event.base_branch or "(default)"
            typer.echo(f"  [Extract] {label}: {event.package_file_count} package files ({event.duration_ms}ms)")
        elif isinstance(event, LookupCompleted):
            label = event.base_branch or "(default)"
            typer.echo(f"  [Lookup] {label}: {event.branch_count} branches ({event.duration_ms}ms)")
        elif isinstance(event, PhaseCompleted):
            typer.echo(f"[Phase] {event.phase} completed ({event.duration_ms}ms)")
        elif isinstance(event, BranchesSorted):
            typer.echo(f"[Schedule] {len(event.branch_names)} branches ordered")


"""Rendering of check results.

format_check() turns one result into styled segments. It does not know
whether the segments end up on a terminal or in a log file; styles are only
hints for the console.

Layout of one entry (DETAILED verbosity, finding):

    [1] CHECK suids: Searching for SUID files                [ WARNING ]
    possible insecurity discovered
    <help text>
    (paths are relative to sysroot /mnt/root)
    /bin/a
    /etc/b
    command: find /mnt/root ...
    <blank line>
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from buck.checks.base import CheckResult, DetailKind, Outcome
from buck.core.context import RunContext
from buck.output.console import Style

__all__ = [
    "HEADER_WIDTH",
    "OK_TAG",
    "WARNING_TAG",
    "Segment",
    "format_check",
    "fit_header",
    "strip_sysroot",
    "finding_details",
    "segments_text",
]

HEADER_WIDTH = 60

OK_TAG = "[ OK ]"
WARNING_TAG = "[ WARNING ]"

FINDING_INTRO = "possible insecurity discovered"
ERROR_INTRO = "test encountered an error during execution"


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    style: Style = Style.DEFAULT


def fit_header(text: str, width: int = HEADER_WIDTH) -> str:
    """Pad or truncate so the status tag starts at column `width`."""
    if len(text) < width:
        return text.ljust(width)
    return text[: width - 4] + "... "


def strip_sysroot(path: str, sysroot: Path) -> str:
    """Show a path as seen from inside the sysroot.

    "/mnt/root/etc/passwd" with sysroot /mnt/root -> "/etc/passwd".
    Paths outside the sysroot are returned unchanged; sysroot "/" strips
    nothing.
    """
    root = str(sysroot).rstrip("/")
    if not root:
        return path
    if path == root:
        return "/"
    if path.startswith(root + "/"):
        return path[len(root) :]
    return path


def finding_details(result: CheckResult, sysroot: Path) -> list[str]:
    """Finding details as displayed: de-prefixed (for paths), then sorted."""
    details: Iterable[str] = result.details
    if result.detail_kind == DetailKind.ABSOLUTE_PATH:
        details = (strip_sysroot(d, sysroot) for d in details)
    return sorted(details)


def format_check(index: int, check_id: str, result: CheckResult, ctx: RunContext) -> list[Segment]:
    """Render one check result into segments."""
    segments = [Segment(fit_header(f"[{index}] CHECK {check_id}: {result.title}"), Style.HEADER)]

    match result.outcome:
        case Outcome.CLEAN:
            segments.append(Segment(OK_TAG + "\n", Style.SUCCESS))
        case Outcome.EXECUTION_ERROR:
            segments.append(Segment(WARNING_TAG + "\n", Style.WARNING))
            if ctx.detailed:
                segments.append(Segment(ERROR_INTRO + "\n", Style.WARNING))
                segments.extend(Segment(detail + "\n") for detail in result.details)
        case Outcome.FINDING:
            segments.append(Segment(WARNING_TAG + "\n", Style.WARNING))
            if ctx.detailed:
                segments.append(Segment(FINDING_INTRO + "\n", Style.WARNING))
                if result.help_text:
                    segments.append(Segment(result.help_text + "\n"))
                if result.detail_kind == DetailKind.ABSOLUTE_PATH:
                    segments.append(
                        Segment(f"(paths are relative to sysroot {ctx.sysroot})\n", Style.DIM)
                    )
                segments.extend(Segment(d + "\n") for d in finding_details(result, ctx.sysroot))

    segments.append(Segment(f"command: {result.command}\n", Style.DIM))
    segments.append(Segment("\n"))
    return segments


def segments_text(segments: Iterable[Segment]) -> str:
    """Plain text of segments (what a log file receives)."""
    return "".join(s.text for s in segments)

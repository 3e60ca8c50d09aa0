"""Fixed-width table layout and colored row rendering."""

from dataclasses import dataclass
from typing import Dict, Iterable

from colorama import Fore, Style

from ..core.types import ReportRow, Severity

HEADERS = ('Repository', 'Branch', 'State')
SEPARATOR = '  '
# two local flags followed by two remote flags
STATE_WIDTH = 4

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.CLEAN: Fore.GREEN,
    Severity.REMOTE_ONLY: Fore.YELLOW,
    Severity.LOCAL_DIRTY: Fore.RED,
}
RESET = Style.RESET_ALL


def max_width(values: Iterable[str]) -> int:
    """Length of the longest string, 0 for an empty iterable."""
    return max((len(v) for v in values), default=0)


@dataclass(frozen=True)
class RowTemplate:
    """Column widths shared by the header, the divider and every row."""
    name_width: int
    branch_width: int
    state_width: int = max(STATE_WIDTH, len(HEADERS[2]))

    @classmethod
    def from_names(cls, names: Iterable[str], branches: Iterable[str]) -> 'RowTemplate':
        """Build a template wide enough for every name, branch and header label.

        Args:
            names: Repository display names
            branches: Branch names (one per repository)

        Returns:
            RowTemplate instance
        """
        return cls(
            name_width=max(max_width(names), len(HEADERS[0])),
            branch_width=max(max_width(branches), len(HEADERS[1]))
        )

    def format(self, name: str, branch: str, state: str) -> str:
        return SEPARATOR.join((
            name.ljust(self.name_width),
            branch.ljust(self.branch_width),
            state,
        ))

    def header(self) -> str:
        return self.format(*HEADERS)

    def divider(self) -> str:
        return SEPARATOR.join(
            '=' * width for width in (self.name_width, self.branch_width, self.state_width)
        )


def render_row(row: ReportRow, template: RowTemplate, color: bool = True) -> str:
    """Format one report row.

    Args:
        row: Probed repository status
        template: Shared column widths
        color: Wrap the line in the severity color and an ANSI reset

    Returns:
        Formatted line without a trailing newline
    """
    line = template.format(row.name, row.branch, row.local_flags + row.remote_flags)
    if not color:
        return line
    return f"{SEVERITY_COLORS[row.severity]}{line}{RESET}"


def render_tally(count: int) -> str:
    """Quiet-mode summary line."""
    return f"Checked {count} {'repository' if count == 1 else 'repositories'}."


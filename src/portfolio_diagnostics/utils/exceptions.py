"""
Exception Hierarchy
===================
Errors raised by the diagnostics engine.

Scoring itself never raises for malformed financial inputs (it degrades to
neutral defaults). Exceptions are reserved for inconsistent configuration
and for unreadable input files at the I/O edge.
"""

from typing import List, Optional


# =============================================================================
# BASE EXCEPTION HIERARCHY
# =============================================================================

class PortfolioDiagnosticsError(Exception):
    """
    Base exception for the diagnostics engine.

    All engine exceptions inherit from this to allow catching every
    engine failure with a single except clause.
    """
    pass


class ScoringConfigError(PortfolioDiagnosticsError):
    """
    Raised when a ScoringConfig violates its ordering preconditions.

    Examples: yellow cutoff not below the green cutoff, a fee band whose
    green ceiling is above its yellow ceiling, a critical checklist item
    that does not exist.

    Args:
        issues: Every problem found, one human-readable line each
        source: Where the config came from (file path, "defaults", ...)
    """

    def __init__(self, issues: List[str], source: Optional[str] = None):
        self.issues = list(issues)
        self.source = source

        msg_parts = [
            f"\n{'=' * 70}",
            f"INVALID SCORING CONFIGURATION ({len(self.issues)} issue{'s' if len(self.issues) != 1 else ''})",
            f"{'=' * 70}",
        ]
        if source:
            msg_parts.append(f"SOURCE: {source}")
        for issue in self.issues:
            msg_parts.append(f"   • {issue}")
        msg_parts.append(f"{'=' * 70}\n")

        super().__init__('\n'.join(msg_parts))


class ConfigFileError(PortfolioDiagnosticsError):
    """Raised when a scoring config file cannot be read or has the wrong shape."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load scoring config '{path}': {reason}")


class HoldingsFileError(PortfolioDiagnosticsError):
    """
    Raised when a holdings/client file cannot be parsed into model objects.

    `row` is the 1-based record number when the failure is tied to one entry.
    """

    def __init__(self, path: str, reason: str, row: Optional[int] = None):
        self.path = path
        self.reason = reason
        self.row = row
        location = f" (record {row})" if row is not None else ""
        super().__init__(f"Cannot load holdings from '{path}'{location}: {reason}")

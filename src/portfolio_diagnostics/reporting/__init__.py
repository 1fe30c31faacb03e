"""
Reporting Module
================
Card copy and the console report.
"""

from portfolio_diagnostics.reporting.content import CARD_COPY, CardCopy, card_title
from portfolio_diagnostics.reporting.console import format_report, print_report

__all__ = [
    'CARD_COPY',
    'CardCopy',
    'card_title',
    'format_report',
    'print_report',
]

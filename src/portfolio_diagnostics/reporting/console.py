"""
Console Report
==============
Plain-text rendering of a PortfolioAnalysis.

Sections:
- header with health score
- portfolio metrics and benchmark deltas
- shock watch (when triggered)
- one block per diagnostic card
- lifetime income security (when reported)
- action plan
"""

import sys
from typing import List, Optional, TextIO

from portfolio_diagnostics.analytics.metrics import compare_to_benchmarks
from portfolio_diagnostics.decision.action_plan import build_action_plan
from portfolio_diagnostics.decision.recommendations import optimization_recommendations
from portfolio_diagnostics.decision.severity import card_severity
from portfolio_diagnostics.decision.shock import detect_shock
from portfolio_diagnostics.models.portfolio import (
    CardSeverity,
    Category,
    DiagnosticResult,
    DiagnosticStatus,
    PortfolioAnalysis,
)
from portfolio_diagnostics.reporting.content import CARD_COPY, card_title
from portfolio_diagnostics.utils.formatting import format_currency

WIDTH = 70

STATUS_ICONS = {
    DiagnosticStatus.GREEN: "🟢",
    DiagnosticStatus.YELLOW: "🟡",
    DiagnosticStatus.RED: "🔴",
}


def _section(lines: List[str], title: str) -> None:
    lines.append("")
    lines.append(title)
    lines.append("-" * WIDTH)


def _card_lines(category: Category, result: DiagnosticResult, verbose: bool) -> List[str]:
    icon = STATUS_ICONS[DiagnosticStatus(result.status)]
    flag = "  ⚠️ EXTREME" if card_severity(category, result) == CardSeverity.EXTREME else ""
    lines = [
        f"  {icon} {card_title(category):<28} {result.score:>5.0f}/100  {result.headline_metric}{flag}",
        f"     {result.key_finding}",
    ]
    copy = CARD_COPY.get(category)
    if verbose and copy:
        lines.append(f"     Why it matters: {copy.why_it_matters}")
    return lines


def format_report(analysis: PortfolioAnalysis, verbose: bool = False) -> str:
    """Render the analysis as a multi-line string."""
    metrics = analysis.metrics
    lines = [
        "=" * WIDTH,
        "                 📊 PORTFOLIO DIAGNOSTIC REPORT",
        "=" * WIDTH,
        f"  Health Score:           {analysis.health_score:>12d}/100",
    ]

    # === METRICS ===
    _section(lines, "📈 PORTFOLIO METRICS")
    lines.append(f"  Total Value:            {format_currency(metrics.total_value):>12}")
    lines.append(f"  Unrealized Gain:        {format_currency(metrics.unrealized_gain):>12}")
    lines.append(f"  Expected Return:        {metrics.expected_return:>12.2%}")
    lines.append(f"  Volatility:             {metrics.volatility:>12.2%}")
    lines.append(f"  Sharpe Ratio:           {metrics.sharpe_ratio:>12.2f}")
    lines.append(f"  Annual Fees:            {format_currency(metrics.total_fees):>12}")

    if metrics.total_value > 0:
        _section(lines, "📐 VS BENCHMARKS")
        for row in compare_to_benchmarks(metrics).values():
            lines.append(
                f"  {row['name']:<22} Return {row['return_delta']:>+7.2%}  "
                f"Vol {row['volatility_delta']:>+7.2%}  Sharpe {row['sharpe_delta']:>+6.2f}"
            )

    # === SHOCK WATCH ===
    alert = detect_shock(analysis.diagnostics)
    if alert is not None:
        _section(lines, f"🚨 {alert.title.upper()}")
        lines.append(f"  {alert.message}")
        for driver in alert.drivers:
            lines.append(f"    • {card_title(driver.category)} ({driver.score:.0f}): {driver.key_finding}")

    # === CARDS ===
    _section(lines, "🩺 DIAGNOSTICS")
    for category, result in analysis.diagnostics.items():
        lines.extend(_card_lines(category, result, verbose))

    if analysis.lifetime_income_security is not None:
        _section(lines, "🏦 LIFETIME INCOME SECURITY (not in health score)")
        lines.extend(_card_lines(Category.LIFETIME_INCOME_SECURITY, analysis.lifetime_income_security, verbose))

    # === ACTION PLAN ===
    optimization = analysis.diagnostics.get(Category.OPTIMIZATION)
    extra = []
    if optimization is not None and analysis.metrics.total_value > 0:
        extra = optimization_recommendations(optimization, start_priority=len(analysis.recommendations) + 1)
    plan = build_action_plan([analysis.recommendations, extra])

    _section(lines, "✅ ACTION PLAN")
    if not plan:
        lines.append("  No actions needed right now.")
    for number, rec in enumerate(plan, 1):
        lines.append(f"  {number}. {rec.title}")
        lines.append(f"     {rec.description}")
        lines.append(f"     Impact: {rec.impact}")

    lines.append("=" * WIDTH)
    return "\n".join(lines)


def print_report(analysis: PortfolioAnalysis, file: Optional[TextIO] = None, verbose: bool = False) -> None:
    print(format_report(analysis, verbose=verbose), file=file or sys.stdout)

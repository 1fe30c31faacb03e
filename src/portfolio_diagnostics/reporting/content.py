"""
Card Copy
=========
Display text of each diagnostic card. Presentation only: nothing in the
scoring path reads this module.
"""

from dataclasses import dataclass
from typing import Dict

from portfolio_diagnostics.models.portfolio import Category


@dataclass(frozen=True)
class CardCopy:
    title: str
    subtitle: str
    why_it_matters: str


CARD_COPY: Dict[Category, CardCopy] = {
    Category.RISK_MANAGEMENT: CardCopy(
        title="Diversification Check",
        subtitle="Are you too concentrated in one stock, fund, or sector?",
        why_it_matters="A single position or sector can dominate outcomes when it falls.",
    ),
    Category.PROTECTION: CardCopy(
        title="Vulnerability Scan",
        subtitle="Which economic shocks is your mix exposed to?",
        why_it_matters="Inflation, rate moves and crashes hit different asset mixes differently.",
    ),
    Category.RETURN_EFFICIENCY: CardCopy(
        title="Return Efficiency",
        subtitle="Are your holdings earning enough for their risk?",
        why_it_matters="Low risk-adjusted returns mean taking volatility without being paid for it.",
    ),
    Category.COST_ANALYSIS: CardCopy(
        title="Fees & Fund Costs",
        subtitle="How much fees may be quietly costing you",
        why_it_matters="Fees compound every year whether markets go up or down.",
    ),
    Category.TAX_EFFICIENCY: CardCopy(
        title="Tax Efficiency",
        subtitle="Are you paying more taxes than you need to?",
        why_it_matters="Asset location and harvested losses add return at no extra risk.",
    ),
    Category.DIVERSIFICATION: CardCopy(
        title="Portfolio Breadth",
        subtitle="Do you hold enough different things, but not too many?",
        why_it_matters="Too few holdings concentrate risk; too many are hard to manage.",
    ),
    Category.RISK_ADJUSTED: CardCopy(
        title="Goal Probability",
        subtitle="How likely is your portfolio to reach your target?",
        why_it_matters="The right mix depends on where you need to be and when.",
    ),
    Category.CRISIS_RESILIENCE: CardCopy(
        title="Market Drop Risk",
        subtitle="How much could your portfolio fall in a bad market?",
        why_it_matters="Deep losses at the wrong time can force selling at the bottom.",
    ),
    Category.OPTIMIZATION: CardCopy(
        title="Optimization Potential",
        subtitle="How much better could the same money work?",
        why_it_matters="Small fee and allocation changes can lift returns per unit of risk.",
    ),
    Category.PLANNING_GAPS: CardCopy(
        title="Planning Checklist",
        subtitle="Common money basics that protect your plan",
        why_it_matters="Estate and insurance gaps can undo years of good investing.",
    ),
    Category.LIFETIME_INCOME_SECURITY: CardCopy(
        title="Retirement Readiness",
        subtitle="Will your guaranteed income cover your core spending for life?",
        why_it_matters="Guaranteed income covering essentials removes market dependence for basic needs.",
    ),
}


def card_title(category: Category) -> str:
    copy = CARD_COPY.get(category)
    return copy.title if copy else Category(category).value.replace('_', ' ').title()

"""
Command Line Interface
======================
analyze-portfolio HOLDINGS [--client FILE] [--config FILE] [--json]

Exit codes:
    0  analysis printed
    2  invalid scoring configuration or unreadable input file
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from portfolio_diagnostics import __version__
from portfolio_diagnostics.config.loader import load_scoring_config
from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG
from portfolio_diagnostics.core.engine import analyze_portfolio
from portfolio_diagnostics.data.loader import ClientFile, load_client_file, load_holdings_file
from portfolio_diagnostics.models.portfolio import AdviceModel, ClientInfo, PlanningChecklist
from portfolio_diagnostics.reporting.console import print_report
from portfolio_diagnostics.utils.exceptions import PortfolioDiagnosticsError
from portfolio_diagnostics.utils.logger import get_logger, set_console_level

logger = get_logger(__name__)

CONFIG_ENV_VAR = "PORTFOLIO_DIAGNOSTICS_CONFIG"
EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="analyze-portfolio",
        description="Score a portfolio snapshot across ten diagnostic categories",
    )
    parser.add_argument("holdings", help="Holdings file (.json, .yaml/.yml or .csv)")
    parser.add_argument("--client", help="Client profile file (.json or .yaml/.yml)", default=None)
    parser.add_argument(
        "--config",
        help=f"Scoring config overrides (.json or .yaml/.yml); defaults to ${CONFIG_ENV_VAR}",
        default=None,
    )
    parser.add_argument(
        "--advice-model",
        choices=[m.value for m in AdviceModel],
        default=None,
        help="Fee band used by the cost analysis (overrides the client file)",
    )
    parser.add_argument("--advisor-fee", type=float, default=None, help="Annual advisory fee, 0.01 = 1%%")
    parser.add_argument("--no-risk-overlay", action="store_true",
                        help="Score against the config as given, without the risk-tolerance overlay")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging and card explanations")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    try:
        config_path = args.config or os.environ.get(CONFIG_ENV_VAR)
        config = load_scoring_config(config_path) if config_path else DEFAULT_SCORING_CONFIG

        holdings = load_holdings_file(args.holdings)
        if args.client:
            client = load_client_file(args.client)
        else:
            client = ClientFile(client_info=ClientInfo(), planning_checklist=PlanningChecklist())

        advice_model = AdviceModel(args.advice_model or client.advice_model or AdviceModel.SELF_DIRECTED)
        advisor_fee = args.advisor_fee if args.advisor_fee is not None else (client.advisor_fee or 0.0)

        analysis = analyze_portfolio(
            holdings,
            client.client_info,
            client.planning_checklist,
            config=config,
            advice_model=advice_model,
            advisor_fee=advisor_fee,
            lifetime_income=client.lifetime_income,
            apply_risk_tolerance=not args.no_risk_overlay,
        )
    except PortfolioDiagnosticsError as e:
        logger.debug(f"Analysis aborted by {type(e).__name__}")
        print(str(e), file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.json:
        print(analysis.to_json())
    else:
        print_report(analysis, verbose=args.verbose)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

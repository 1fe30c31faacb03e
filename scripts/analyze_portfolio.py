#!/usr/bin/env python3
"""
Portfolio Diagnostics CLI Entry Point
=====================================
Minimal CLI wrapper around portfolio_diagnostics.core.cli.

Usage:
    python scripts/analyze_portfolio.py holdings.csv --client client.yaml
    # or after pip install -e .
    analyze-portfolio holdings.csv --client client.yaml
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent.parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from portfolio_diagnostics.core.cli import main


if __name__ == "__main__":
    sys.exit(main())

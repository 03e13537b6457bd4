#!/usr/bin/env python
"""Main entry point for the insolvency filings report.

Runs the full report with the settings in report.toml.
"""

import sys

from insolvency_eda.pipeline import main

if __name__ == "__main__":
    sys.exit(main())

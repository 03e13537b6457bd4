"""Exploratory analysis of German insolvency court filings."""

__version__ = "0.1.0"

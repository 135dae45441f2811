"""
Finance Tracker - Source Package

A single-user personal finance tracker: record income and expense
transactions, categorize them, keep them in a local key-value store and
project them into summaries, chart series and plain-language insights.

DESIGN PRINCIPLES:
1. One store owns the state, everything else reads copies
2. Every mutation notifies subscribers synchronously
3. Bad data degrades to defaults, it never crashes the app
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"

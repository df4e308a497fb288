"""
Unified CLI entry points for chart operations.

Provides command-line interfaces for:
- Indicator computation (cli.indicators)
- Parameter reference (cli.params)
"""

"""
CLI entry points for the analysis engine.

Provides command-line interfaces for:
- Analyzing a price file (analyze)
- Parameter reference (params)
"""

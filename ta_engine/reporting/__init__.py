"""
Reporting module.

Provides matplotlib charts of an analyzed series.
"""
from .chart import AnalysisChart

__all__ = ['AnalysisChart']

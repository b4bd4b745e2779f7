"""
Data loading module.

Reads local CSV and JSON price files into TimeSeries.
"""
from .loader import load_csv, load_json, load_series

__all__ = ['load_csv', 'load_json', 'load_series']

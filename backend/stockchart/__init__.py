"""
StockChart: technical-indicator engine behind the dashboard chart.
"""

__version__ = "0.1.0"

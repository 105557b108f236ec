"""
StockChart Core

Configuration and logging shared by every layer.
"""

"""
chartstats — descriptive statistics and chart scaling for monitoring dashboards.
"""

__version__ = "0.1.0"

"""
Core domain models, statistics, and scaling primitives.

This module contains the foundational building blocks that are independent
of rendering and data sources.
"""

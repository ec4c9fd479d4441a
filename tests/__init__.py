"""
Test suite for chartstats

Contains:
- tests/unit/          : Unit tests for stats, scaling, chart layouts, contracts and providers
"""

"""
Application Layer Package

Metric calculators, dashboard use cases and the DTOs handed to the
presentation layer.
"""

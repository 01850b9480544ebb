"""Core services for cleancopy.

Configuration, paths, theming, error types and the run orchestrator.
"""

"""Bundled data files for cleancopy."""

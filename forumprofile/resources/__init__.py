"""Bundled templates and scripts."""

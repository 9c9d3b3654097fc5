"""Textual presentation layer for exportdiff."""

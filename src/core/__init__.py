"""Core domain package for exportdiff.

Core contains export parsing, cutoff resolution, deduplication and attachment
extraction without any storage or UI specific code, keeping the logic
portable.
"""

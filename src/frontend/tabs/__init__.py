"""Tabs shown by the export diff viewer."""

"""Storage and formatting adapters for the core ports."""

"""Command-line entry point for logalizer."""

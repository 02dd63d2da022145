"""Core infrastructure: settings, errors, output files and scheduling."""

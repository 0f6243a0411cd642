"""Command-line and scripted client for the attendance form."""

"""CLI layer (Typer + Rich): flag parsing, printing and exit codes."""

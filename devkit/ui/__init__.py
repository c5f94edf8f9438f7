"""User interfaces — the click CLI."""

"""Shell adapters — the one place subprocesses are spawned."""

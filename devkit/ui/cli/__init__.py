"""
CLI rendering helpers.

Services report through ``on_progress(kind, message)``; everything the
operator sees is printed here with ``click.secho``.
"""

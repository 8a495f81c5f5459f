"""Allow running with `python -m pos_server`."""

from .cli import main

main()

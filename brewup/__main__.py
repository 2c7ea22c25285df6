from .brewup import cli

raise SystemExit(cli())

"""Allow running the CLI with ``python -m devcluster``."""

from devcluster.cli import app

app()

"""Allow running as ``python -m get_everything_done``."""

from get_everything_done.cli.main import app

if __name__ == "__main__":
    app()

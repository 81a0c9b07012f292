"""Main entry point for `python -m midiwire`."""

from midiwire.cli.main import cli


if __name__ == "__main__":
    cli()

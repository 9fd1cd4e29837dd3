"""Entry point for `python -m avaxapi`."""

from avaxapi.cli.commands import app

if __name__ == "__main__":
    app()

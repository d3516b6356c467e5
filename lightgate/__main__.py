"""Entry point for running lightgate as a module: python -m lightgate."""

from lightgate.cli.commands import app

if __name__ == "__main__":
    app()

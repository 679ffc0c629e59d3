from csssnap.cli.main import cli

__all__ = ["cli"]

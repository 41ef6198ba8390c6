"""Entry point for running gitwrap as a module."""

from gitwrap.cli import app


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

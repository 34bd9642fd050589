"""Entry point for running vaguefinder as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the vaguefinder CLI application."""
    app()


if __name__ == "__main__":
    main()

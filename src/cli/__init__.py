"""Main CLI application module."""

from .server_commands import server_app

# The server commands are the top-level commands of the CLI
app = server_app


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

"""Main entry point for ssinclude package."""

import sys


def main():
    """Main function for ssinclude."""
    from ssinclude.cli.main import cli

    try:
        return cli()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())

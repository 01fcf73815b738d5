"""Entry point for 'python -m outletbase' command."""

from outletbase.cli import main

if __name__ == "__main__":
    main()

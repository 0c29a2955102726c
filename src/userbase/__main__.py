"""Entry point for 'python -m userbase'."""

from userbase.cli import main

if __name__ == "__main__":
    main()

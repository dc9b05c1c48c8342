"""Entry point for `python -m claude_history`."""

import sys


def main():
    from claude_history.app import run
    sys.exit(run())


if __name__ == "__main__":
    main()

"""Entry point for `python -m antenna`."""

import sys


def main():
    from antenna.app import run
    sys.exit(run())


if __name__ == "__main__":
    main()

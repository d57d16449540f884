"""Entry point for running the timesheet CLI."""

import sys

from cao_timesheet.cli import main

if __name__ == "__main__":
    sys.exit(main())

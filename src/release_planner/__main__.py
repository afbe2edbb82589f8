"""Allow running as ``python -m release_planner``."""

from release_planner.cli.app import main

if __name__ == "__main__":
    main()

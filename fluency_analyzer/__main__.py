"""Package entry point for ``python -m fluency_analyzer``."""

from fluency_analyzer.cli import main

if __name__ == "__main__":
    main()

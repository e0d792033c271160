"""
Entry point for running the simulator as a module: python -m schedsim
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())

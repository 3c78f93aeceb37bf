"""Run the funcinterp CLI.

Usage:
    python -m funcinterp repl                  # interactive read loop
    python -m funcinterp eval "ADD(1,2)"       # one-shot evaluation
"""

from funcinterp.cli.main import main

if __name__ == "__main__":
    main()

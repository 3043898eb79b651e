"""Entry point for running the CLI as a module.

This allows running: python -m cbai
"""

from .cli import main

if __name__ == "__main__":
    # main() is the CLI boundary and already maps every failure to an exit code.
    main()

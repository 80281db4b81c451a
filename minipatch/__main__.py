"""Entry point for ``python -m minipatch``."""

from minipatch.cli import main

if __name__ == "__main__":
    main()

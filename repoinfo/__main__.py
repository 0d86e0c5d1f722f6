"""Entry point for ``python -m repoinfo``."""

from .cli import main

if __name__ == "__main__":
    main()

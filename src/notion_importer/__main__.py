"""Entry point for ``python -m notion_importer``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())

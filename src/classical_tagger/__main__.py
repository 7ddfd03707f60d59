"""Main entry point for classical-tagger."""

import sys

from classical_tagger.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())

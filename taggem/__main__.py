"""Entry point: python -m taggem"""

import sys

from taggem.cli import main

if __name__ == "__main__":
    sys.exit(main())

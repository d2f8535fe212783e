import sys

from vim_init.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

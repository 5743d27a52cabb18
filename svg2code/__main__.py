import sys

from svg2code.cli import main

if __name__ == "__main__":
    sys.exit(main())

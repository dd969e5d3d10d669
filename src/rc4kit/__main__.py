import sys

from rc4kit.cli.main import main

if __name__ == "__main__":
    sys.exit(main())

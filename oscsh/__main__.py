import sys

from oscsh.shell import main

if __name__ == "__main__":
    sys.exit(main())

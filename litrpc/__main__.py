import sys

from litrpc.cli import main

sys.exit(main())

import sys

from slisp.cli import main

sys.exit(main())

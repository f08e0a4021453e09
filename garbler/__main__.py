"""Allow running the package with ``python -m garbler``."""

import sys

from garbler.cli import main

sys.exit(main())

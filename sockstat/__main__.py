"""Allow running as python -m sockstat."""

import sys

from sockstat.cli import main

sys.exit(main())

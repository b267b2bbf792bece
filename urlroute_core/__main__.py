"""Allow ``python -m urlroute_core``."""

import sys

from urlroute_core.cli import main

sys.exit(main())

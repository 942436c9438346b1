"""Allow running the auditor with ``python -m kubetally``."""

import sys

from kubetally.app import main

sys.exit(main())

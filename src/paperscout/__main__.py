"""Allow ``python -m paperscout``."""

import sys

from paperscout.cli import main

sys.exit(main())

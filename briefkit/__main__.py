"""Allow ``python -m briefkit``."""

import sys

from .cli import main

sys.exit(main())

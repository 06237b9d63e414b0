"""Allow ``python -m quickrank``."""

import sys

from .cli import main

sys.exit(main())

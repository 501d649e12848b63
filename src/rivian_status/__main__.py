"""Allow ``python -m rivian_status``."""

import sys

from .cli import main

sys.exit(main())

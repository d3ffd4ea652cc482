"""Allow ``python -m ipl_cli``."""

import sys

from ipl_cli.cli import main

sys.exit(main())

"""Allow ``python -m docker_utility``."""

import sys

from docker_utility.cli import main

sys.exit(main())

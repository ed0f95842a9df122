"""Allow running git-wtm with `python -m git_wtm`."""

import sys

from git_wtm.cli.main import main

sys.exit(main())

"""Entry point for python -m amm_engine."""

import sys

from amm_engine.cli import main

sys.exit(main())

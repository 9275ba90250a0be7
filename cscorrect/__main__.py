"""Allow ``python -m cscorrect``."""

import sys

from cscorrect.cli import main

sys.exit(main())

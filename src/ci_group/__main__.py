import sys

from ci_group.cli import main

sys.exit(main())

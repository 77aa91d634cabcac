import sys

from freakend.cli import main

sys.exit(main())

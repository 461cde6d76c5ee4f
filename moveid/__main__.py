import sys

from moveid.cli import main

sys.exit(main())

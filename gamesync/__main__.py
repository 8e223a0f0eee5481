import sys

from gamesync.cli import main

sys.exit(main())

import sys

from shelfarchive.cli import main

sys.exit(main())

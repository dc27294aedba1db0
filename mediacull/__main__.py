import sys

from mediacull.cli import main

sys.exit(main())

import sys

from pathgroups.cli import main

sys.exit(main())

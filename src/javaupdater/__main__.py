import sys

from javaupdater.cli import main

sys.exit(main())

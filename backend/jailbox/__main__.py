import sys

from jailbox.cli import main

sys.exit(main())

import sys

from passwatch.cli import main

sys.exit(main())

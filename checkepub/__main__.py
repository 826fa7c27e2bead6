import sys

from checkepub.cli import main

sys.exit(main())

import sys

from writebench.cli import main


sys.exit(main())

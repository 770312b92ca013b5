import sys

from loudbars.app import main


sys.exit(main())

import sys

from abilityscout.main import main

sys.exit(main())

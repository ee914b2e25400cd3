import sys

from statbeacon.main import main

sys.exit(main())

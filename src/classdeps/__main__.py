import sys

from classdeps.main import main

sys.exit(main())

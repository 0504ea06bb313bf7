import sys

from lunix_monitor.main import main

sys.exit(main())

import sys

from feed_relay.cli import main

sys.exit(main())

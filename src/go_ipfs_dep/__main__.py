import sys

from go_ipfs_dep.cli import main

sys.exit(main())

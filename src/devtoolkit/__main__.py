import sys

from devtoolkit.cli import main

sys.exit(main())

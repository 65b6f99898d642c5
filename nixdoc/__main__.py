import sys

from nixdoc.cli import main

sys.exit(main())

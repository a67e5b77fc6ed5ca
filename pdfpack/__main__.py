import sys

from pdfpack.cli import main

sys.exit(main())

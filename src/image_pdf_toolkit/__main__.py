"""Allow ``python -m image_pdf_toolkit``."""

import sys

from image_pdf_toolkit.cli import main

sys.exit(main())

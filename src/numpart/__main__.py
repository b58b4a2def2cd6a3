# src/numpart/__main__.py
import sys

from numpart.cli import main

sys.exit(main())

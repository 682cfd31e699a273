import sys

from .qt_colorpicker import main

sys.exit(main())

import sys

from wav2pwl.cli import main

sys.exit(main())

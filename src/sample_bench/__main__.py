import sys

from sample_bench.cli import main

sys.exit(main())

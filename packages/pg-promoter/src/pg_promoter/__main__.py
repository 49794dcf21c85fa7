import sys

from pg_promoter.cli import main

sys.exit(main())

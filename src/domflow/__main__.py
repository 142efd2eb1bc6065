import sys

from domflow.cli.main import main

sys.exit(main())

import sys

from markov_service.cli import main

sys.exit(main())

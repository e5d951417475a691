import sys

from cellar_solitaire.main import main

sys.exit(main())

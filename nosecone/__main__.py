import sys

from nosecone.launcher import main

sys.exit(main())

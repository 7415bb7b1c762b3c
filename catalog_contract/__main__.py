from __future__ import annotations

import sys

from catalog_contract.runner import main

sys.exit(main())

from __future__ import annotations

from crust.main import main

raise SystemExit(main())

"""Allow ``python -m groupme_api``."""

from .cli import main

raise SystemExit(main())

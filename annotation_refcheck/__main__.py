"""Entry point for ``python -m annotation_refcheck``."""

from annotation_refcheck.main import main

raise SystemExit(main())

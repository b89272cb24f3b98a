#!/usr/bin/env python3
"""Entry point for the bas2c translator."""

from __future__ import annotations

from bas2c import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

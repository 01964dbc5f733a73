#!/usr/bin/env python3
"""
cardsheet - lay out card images on print sheets

Packs card fronts (and optionally backs) onto pages and reports
utilization, cut lines and front/back alignment.
"""

from cardsheet.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

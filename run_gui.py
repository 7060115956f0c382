#!/usr/bin/env python3
"""Launcher for the Magic Lens GUI (PyQt6)."""

import sys

if __name__ == "__main__":
    from magic_lens.gui import main
    sys.exit(main())

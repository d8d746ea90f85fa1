"""
Space Defender launcher.

    pip install -e .
    python main.py
"""

import sys

from space_defender.game import main

if __name__ == "__main__":
    sys.exit(main())

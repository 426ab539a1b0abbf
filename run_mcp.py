#!/usr/bin/env python3
import sys
import os

# Make src/ importable when running from a checkout without installing
current_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(current_dir, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from zepmcp.mcp.server import main

if __name__ == "__main__":
    # Transport comes from config.yaml / ZEPMCP_TRANSPORT (stdio by default)
    main()

#!/usr/bin/env python3
"""
RBAC Preflight Entry Point

This script provides a simple entry point for the RBAC Preflight tool.
All application logic is contained in the rbac_preflight.libs.main_app module.
"""

import sys
from pathlib import Path

# Allow running from a source checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent))

if __name__ == "__main__":
    try:
        from rbac_preflight.libs.main_app import main
    except ImportError as e:
        print(f"Error importing main application: {e}")
        print("Please install the dependencies with: pip install -e .")
        sys.exit(1)
    main()

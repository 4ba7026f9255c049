"""Main entry point for the Streamlit app.

Streamlit executes this file as a script, so the project root is put on
``sys.path`` before the package is imported.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from expense_tracker.app import main

if __name__ == "__main__":
    main()

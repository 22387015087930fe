#!/usr/bin/env python3
"""
Entry point that starts the FastAPI server
"""
import sys
from pathlib import Path

# Add the project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # auto reload while developing
    )

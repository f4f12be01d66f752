#!/usr/bin/env python3
"""Main entry point: interactive console plus render loop."""

import os
import sys
from pathlib import Path

# Keep pygame quiet on import; only its math and clock are used
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Add project to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from canvas3d.config import load_config, use_defaults
from canvas3d.console import run_console
from canvas3d.core import Canvas
from canvas3d.logging_setup import setup_logging
from canvas3d.services import CodeGenerator


def main():
    """Run the canvas console."""
    # Load configuration
    config_path = project_root / "config" / "config.yaml"

    if config_path.exists():
        load_config(str(config_path))
    else:
        print("config/config.yaml not found, using defaults (set GEMINI_API_KEY for code generation)")
        use_defaults()

    setup_logging()

    canvas = Canvas(generator=CodeGenerator.from_config())
    run_console(canvas)


if __name__ == "__main__":
    main()

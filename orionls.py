#!/usr/bin/env python3
"""orionls: language server for Orion.

Thin entry point that delegates to src.devex.lsp.server.main.
"""

from src.devex.lsp.server import main

if __name__ == "__main__":
    main()

"""Entry point: python -m scaffold -i openapi.json -o gen/"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()

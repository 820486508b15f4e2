# san_notation/__main__.py
"""
Allows running the command-line front end with `python -m san_notation`.
"""
from san_notation.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

"""CLI entry point - wrapper around the cli package

    python cli.py                  # serve /api/gear on PORT
    python cli.py --cli < req.json # generate one item and print it
"""

from cli.main import main

if __name__ == "__main__":
    main()

"""Module entry point: python -m odometer <directory>"""

from odometer.cli import main


if __name__ == "__main__":
    main()

"""Package entry point for ``python -m spin_converter``.

WHY: Users run the converter as ``python -m spin_converter script.R``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from spin_converter.cli import main

if __name__ == "__main__":
    main()

"""Package entry point for ``python -m vnscript_converter``.

WHY: Users run the converter as ``python -m vnscript_converter
script.dat --reference-dir refs/``.

HOW: Delegates to the CLI's main() function.
"""

from vnscript_converter.cli import main

if __name__ == "__main__":
    main()

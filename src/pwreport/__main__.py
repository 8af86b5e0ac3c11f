"""Allow running pwreport as a module: python -m pwreport."""

from pwreport.cli import main

if __name__ == "__main__":
    main()

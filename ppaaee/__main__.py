"""
Allows running as:

    python -m ppaaee ...
"""
from ppaaee.cmdline import main

main()

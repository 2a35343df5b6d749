#!/usr/bin/env python

import sys

sys.path.append(".")

# isort: split

from rdstail.cli import run

if __name__ == "__main__":
    run()

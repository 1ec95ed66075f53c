#!/usr/bin/env python3
from bloggen.cli import run

if __name__ == "__main__":
    run()

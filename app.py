#!/usr/bin/env python3
from kiosklauncher.launcher import main

if __name__ == "__main__":
    main()

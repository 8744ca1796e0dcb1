#!/usr/bin/env python3
from kiosklauncher.service import main

if __name__ == "__main__":
    main()

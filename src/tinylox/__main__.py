#!/usr/bin/env python3
from tinylox import main

if __name__ == "__main__":
    main()

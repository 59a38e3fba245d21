"""
Entry point for running AndroidSdkKit CLI as a module.

Usage: python -m androidsdkkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()

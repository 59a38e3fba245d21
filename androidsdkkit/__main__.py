"""
Entry point for running AndroidSdkKit CLI as a module.

Usage: python -m androidsdkkit [command] [options]
"""

from androidsdkkit.cli.parser import main

if __name__ == "__main__":
    main()

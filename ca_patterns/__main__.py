import sys

from .cli import classify_cli

if __name__ == "__main__":
    sys.exit(classify_cli())

import sys

from image_resizer.main import run

if __name__ == "__main__":
    sys.exit(run())

"""Central path configuration for codenames-live."""

from pathlib import Path

PACKAGE_ROOT = Path(__file__).parent

# Packaged resources
DATA_DIR = PACKAGE_ROOT / "data"
WORDLIST_PATH = DATA_DIR / "wordlist.txt"

from pathlib import Path

# Centralized default locations for bundled data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
CATALOG_FILE = DATA_DIR / 'catalog.json'
USERS_FILE = DATA_DIR / 'users.json'
PROMPT_FILE = DATA_DIR / 'prompt.txt'

__all__ = ['DATA_DIR', 'CATALOG_FILE', 'USERS_FILE', 'PROMPT_FILE']

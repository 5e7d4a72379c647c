from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
USERS_FILE = PROJECT_ROOT / 'users.csv'
LOGS_DIR = PROJECT_ROOT / 'logs'

# Wire format
FRAME_DELIMITER = b'\0'
REPLY_SIZE = 4

PROMPT = 'ftp> '

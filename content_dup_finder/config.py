import json
import logging

# Logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "default_db": "data/file.db",
    "hash_algorithm": "sha256",
    "queue_size": 100,
    "skip_unreadable": False,
    "progress": True
}

def load_config(config_file='config.json'):
    """Load configuration from file, filling missing keys with defaults."""
    settings = DEFAULT_CONFIG.copy()
    try:
        with open(config_file, 'r') as f:
            settings.update(json.load(f))
    except FileNotFoundError:
        pass
    return settings

config = load_config()

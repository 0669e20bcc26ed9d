"""diskprobe - directory size analyzer."""

__version__ = "0.1.0"

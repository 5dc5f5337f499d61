"""wer - find who last edited a file or directory."""

__version__ = "0.1.0"

"""Excel export of batch decryption reports."""

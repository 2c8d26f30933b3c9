"""PDF Statement Decryption Tool.

Decrypts password-protected PDF statements in a directory by trying a
short list of candidate passwords derived from a date of birth and a
citizen ID number.
"""

__version__ = "1.0.0"
__author__ = "pdecrypt contributors"

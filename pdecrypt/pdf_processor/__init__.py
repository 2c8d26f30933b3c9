"""PDF decryption: the PyPDF2 capability and the batch matching loop."""

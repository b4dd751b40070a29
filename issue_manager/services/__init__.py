"""Record I/O and issue storage."""

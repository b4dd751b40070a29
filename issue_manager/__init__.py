"""Issue manager: bug and enhancement lifecycle tracking over a flat record file."""

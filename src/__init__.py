"""
Package marker for the public library service under `src`.
The HTTP layer lives in `src.api`; shared settings, logging, and engine helpers live in `src.common`.
"""

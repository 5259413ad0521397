"""Environment snapshots in the KEY=VALUE form the normalizers consume."""

import os
from typing import List, Mapping, Optional, Sequence


def environ_snapshot(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return a KEY=VALUE list for a mapping, defaulting to the process environment."""
    source = os.environ if environ is None else environ
    return [f"{key}={value}" for key, value in source.items()]


def lookup(environ: Sequence[str], key: str) -> Optional[str]:
    """Return the value of the first KEY=VALUE entry for key, or None."""
    prefix = f"{key}="
    for entry in environ:
        if entry.startswith(prefix):
            return entry[len(prefix) :]
    return None

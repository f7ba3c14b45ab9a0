"""General utils functions"""

import os


def join_path(*parts: str) -> str:
    """Join path fragments, treating every fragment after the first as relative.

    ``os.path.join`` discards everything before an absolute fragment, which is
    wrong for repository sub-paths such as ``/sub/dir``. Empty fragments are
    ignored and the result is normalized.

    Args:
        *parts: Path fragments

    Returns:
        The joined path, or an empty string if every fragment is empty
    """
    fragments = [p for p in parts if p]
    if not fragments:
        return ""
    head, *rest = fragments
    return os.path.normpath(os.path.join(head, *(p.lstrip(os.sep) for p in rest)))

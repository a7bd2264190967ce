from typing import Dict, Set


def exclude_keys(data: Dict, keys: Set[str]) -> Dict:
    """Drop generated fields (ids, timestamps) before comparing a response body."""
    return {k: v for k, v in data.items() if k not in keys}

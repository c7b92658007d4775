# backend/bm_core/common/spectacular_hooks.py
from __future__ import annotations


def preprocess_exclude_legacy_api(endpoints):
    """
    ROOT_URLCONF mounts the same router twice:
      /api/v1/  (primary)
      /api/     (alias kept for the existing web client)

    drf-spectacular would document both, producing duplicate paths and
    operationId suffixes (list2, retrieve2). Keep /api/v1/* only.
    """
    filtered = []
    for path, path_regex, method, callback in endpoints:
        if path.startswith("/api/") and not path.startswith("/api/v1/"):
            continue
        filtered.append((path, path_regex, method, callback))
    return filtered

from __future__ import annotations
from functools import wraps
import logging

def logged(fn):
    """Log the outcome of `fn` on the logger of the module that defines it."""
    log = logging.getLogger(fn.__module__)

    @wraps(fn)
    def wrapper(*args, **kwargs):
        name = fn.__qualname__
        try:
            res = fn(*args, **kwargs)
        except Exception:
            log.exception("%s: error", name)
            raise
        log.debug("%s: ok -> %s", name, res)
        return res
    return wrapper

from .repro import resolve_seed

__all__ = ["resolve_seed"]

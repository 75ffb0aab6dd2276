from .navigator import Navigator, run_attempts

__all__ = ["Navigator", "run_attempts"]

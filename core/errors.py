# core/errors.py

from fastapi import HTTPException

from core.logging_config import logger


# ============================================================
# Permission engine error taxonomy
# ============================================================
class AccessEngineError(Exception):
    """Base class for errors raised by the permission engine."""


class LookupFailure(AccessEngineError):
    """
    A data-store read failed (network, PostgREST, bad payload).
    The resolver treats the affected access source as non-matching.
    """

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EventLookupError(LookupFailure):
    """
    The event row itself could not be read. Distinct from "no permission":
    nothing about the event is known, so resolution cannot continue.
    """


# ============================================================
# Supabase error helpers
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue / PostgREST APIError
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3: Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def lookup_failure(error: Exception, operation: str, *, event: bool = False) -> LookupFailure:
    """
    Wrap a Supabase / database error into a LookupFailure.
    Returns (doesn't raise) so the caller can `raise ... from error`.
    """
    detail = extract_supabase_error(error)
    if event:
        return EventLookupError(operation, detail)
    return LookupFailure(operation, detail)


def handle_lookup_error(error: LookupFailure) -> HTTPException:
    """
    Map a failed event lookup to a response that cannot be mistaken for
    a grant or for an unhandled server error.
    """
    logger.error(f"{error.operation}: {error.detail}")
    return HTTPException(
        status_code=503,
        detail=f"{error.operation} failed, permissions could not be resolved",
    )

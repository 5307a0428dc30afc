"""Company context manager for ensuring company isolation."""

from contextvars import ContextVar
from typing import Optional

# Context variable for company_id
company_id_var: ContextVar[Optional[int]] = ContextVar("company_id", default=None)


def set_company_context(company_id: int | None) -> None:
    """Set the current company context.

    Args:
        company_id: Company ID to set in context
    """
    company_id_var.set(company_id)


def get_company_context() -> int | None:
    """Get the current company context.

    Returns:
        Current company ID or None
    """
    return company_id_var.get()


def clear_company_context() -> None:
    """Clear the current company context."""
    company_id_var.set(None)

"""Per-request error list that handlers can attach to."""
from starlette.requests import Request

STATE_KEY = "auditlog_errors"


def add_error(request: Request, error: BaseException | str) -> None:
    """Attach an error to the current request.

    The request logger reports attached errors in the ``error`` field
    without the handler having to raise.

    Args:
        request: Request being handled.
        error: Exception or message to record.
    """
    errors = getattr(request.state, STATE_KEY, None)
    if errors is None:
        errors = []
        setattr(request.state, STATE_KEY, errors)
    errors.append(error)


def get_errors(request: Request) -> list[BaseException | str]:
    """Return errors attached to the request, oldest first."""
    return list(getattr(request.state, STATE_KEY, None) or [])


def format_errors(errors: list[BaseException | str]) -> str:
    """Render errors one per line as ``Error #01: message``.

    Args:
        errors: Exceptions or messages in the order they occurred.

    Returns:
        Formatted lines, or an empty string when there are none.
    """
    return "".join(
        f"Error #{index:02d}: {error}\n" for index, error in enumerate(errors, start=1)
    )

"""
Request/response tracing with Rich panels.

Only the request line, headers (credentials masked) and response status are
printed; bodies are never read for tracing.
"""
from typing import Mapping, Optional

import httpx
from rich.console import Console
from rich.panel import Panel

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "x-api-key", "cookie", "set-cookie"}
)

_console: Optional[Console] = None


def get_console() -> Console:
    """Return the shared stderr console used for tracing."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """Mask a sensitive value, keeping its first few characters."""
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_headers(headers: Mapping[str, str]) -> dict:
    """Copy headers with credential-bearing values masked."""
    masked = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_sensitive(value)
        else:
            masked[key] = value
    return masked


def trace_request(request: httpx.Request, console: Optional[Console] = None) -> None:
    """Print the request line and masked headers."""
    console = console or get_console()
    request_info = f"[bold cyan]{request.method}[/bold cyan] {request.url}"
    console.print(Panel(request_info, title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers(request.headers))


def trace_response(response: httpx.Response, console: Optional[Console] = None) -> None:
    """Print the response status and masked headers."""
    console = console or get_console()
    status_color = "green" if response.is_success else "red"
    response_info = (
        f"[bold {status_color}]{response.status_code}[/bold {status_color}] "
        f"{response.reason_phrase or ''}"
    )
    console.print(
        Panel(response_info, title=f"[bold blue]Response[/bold blue] ({response.request.url})")
    )
    console.print("[bold]Headers:[/bold]", mask_headers(response.headers))

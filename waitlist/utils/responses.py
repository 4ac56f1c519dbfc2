import html

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

JSON_CONTENT_TYPE = "application/json"

PAGE_TEMPLATE = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title>Waitlist</title></head>'
    '<body><main><h1>Waitlist</h1><p>{message}</p><p><a href="/">Back to form</a></p></main></body></html>'
)


def media_type(request: Request) -> str:
    """Content-Type header without parameters such as charset."""
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip()


def is_json_request(request: Request) -> bool:
    return media_type(request) == JSON_CONTENT_TYPE


def write_message(status_code: int, message: str, html_preferred: bool, headers: dict = None) -> Response:
    """Render {"message": ...} for API clients or a small HTML page for plain form posts."""
    if html_preferred:
        return HTMLResponse(
            PAGE_TEMPLATE.format(message=html.escape(message)),
            status_code=status_code,
            headers=headers,
        )
    return JSONResponse({"message": message}, status_code=status_code, headers=headers)

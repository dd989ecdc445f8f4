from typing import Any

from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse


def json_response(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=data, status_code=status_code)


def text_response(text: str, status_code: int = 200) -> PlainTextResponse:
    return PlainTextResponse(text, status_code=status_code)


def redirect_response(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=302)


HOME_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{site} - URL Shortener</title>
  <style>
    body {{ font-family: system-ui, -apple-system, sans-serif; background: #5a67d8; color: white;
           margin: 0; min-height: 100vh; display: flex; justify-content: center; align-items: center; }}
    .container {{ text-align: center; background: rgba(255, 255, 255, 0.1); border-radius: 20px;
                 padding: 3rem; max-width: 500px; margin: 2rem; }}
    .domain {{ color: #ffd700; font-weight: 800; }}
    .footer {{ font-size: 0.9rem; opacity: 0.7; margin-top: 2rem; }}
  </style>
</head>
<body>
  <div class="container">
    <h1>Welcome to <span class="domain">{site}</span></h1>
    <p>This is a URL shortener for {site}</p>
    <p>Thanks for visiting!</p>
    <div class="footer">Making long URLs short, one link at a time</div>
  </div>
</body>
</html>
"""


def home_response(site_name: str) -> HTMLResponse:
    return HTMLResponse(HOME_HTML.format(site=site_name), status_code=200)

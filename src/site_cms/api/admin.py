"""Admin API endpoints with token or session auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from site_cms.config import rate_limit_rules

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


async def is_admin(
    request: Request, x_admin_token: str | None = Header(default=None)
) -> bool:
    """Return True for a valid admin token or a signed-in session cookie."""
    container: AppContainer = request.app.state.container
    if x_admin_token and x_admin_token == container.settings.admin_token:
        return True
    token = request.cookies.get(container.settings.jwt_cookie_name)
    return bool(token) and container.auth_service.verify_token(token) is not None


async def require_admin(admin: bool = Depends(is_admin)) -> None:
    """Ensure requests come from an administrator."""
    if not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/cache", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, object]:
    """Return cache entry counts and size."""
    container: AppContainer = request.app.state.container
    return {"success": True, "cache": container.cache.get_stats().as_dict()}


@router.delete("/cache", dependencies=[Depends(require_admin)])
async def clear_cache(
    request: Request, pattern: str | None = None
) -> dict[str, object]:
    """Delete entries matching `pattern`, or everything when omitted."""
    container: AppContainer = request.app.state.container
    if pattern:
        removed = container.cache.delete_pattern(pattern)
        return {
            "success": True,
            "message": f'Cache entries matching "{pattern}" deleted',
            "deleted": removed,
        }
    container.cache.clear()
    return {"success": True, "message": "All cache cleared"}


@router.get("/rate-limits", dependencies=[Depends(require_admin)])
async def rate_limit_status(request: Request) -> dict[str, object]:
    """Return the configured rate limit rules."""
    container: AppContainer = request.app.state.container
    rules = {
        name: {
            "intervalMs": rule.interval_ms,
            "intervalSeconds": rule.interval_ms // 1000,
            "maxRequests": rule.max_requests,
        }
        for name, rule in rate_limit_rules(container.settings).items()
    }
    return {
        "success": True,
        "enabled": container.settings.enable_rate_limiting,
        "rateLimits": rules,
        "activeWindows": container.rate_limiter.active_windows(),
        "note": "Rate limits are per IP address",
    }


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal admin UI that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Site CMS Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Site CMS Diagnostics</h1>
    <div class="row">
      <input id="token" type="password" placeholder="X-Admin-Token" />
    </div>
    <div class="row">
      <input id="pattern" placeholder="Cache key pattern (empty clears all)" />
    </div>
    <div class="row">
      <button onclick="call('GET', '/admin/cache')">Cache stats</button>
      <button onclick="clearCache()">Clear cache</button>
      <button onclick="call('GET', '/admin/rate-limits')">Rate limits</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      function clearCache() {
        const pattern = document.getElementById('pattern').value;
        const query = pattern ? '?pattern=' + encodeURIComponent(pattern) : '';
        call('DELETE', '/admin/cache' + query);
      }
      async function call(method, path) {
        const token = document.getElementById('token').value;
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch(path, {
          method,
          headers: { 'X-Admin-Token': token }
        });
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        output.textContent = JSON.stringify(await res.json(), null, 2);
      }
    </script>
  </body>
</html>
"""

# mat_core/dashboard/views.py
from __future__ import annotations

import logging

from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST
from rest_framework import status
from rest_framework.exceptions import APIException

from mat_core.dashboard.pages import PAGE_ROWS, PAGES, Page
from mat_core.iam.gate import INACTIVE_MSG, authenticate, has_required
from mat_core.iam.services import SessionService
from mat_core.iam.session import clear_session_cookie, read_session, set_session_cookie

logger = logging.getLogger(__name__)

LOGIN_URL = "/"
HOME_URL = "/dashboard/"
DENIED_TEMPLATE = "dashboard/denied.html"


def _nav(permissions: set[str]) -> list[dict]:
    return [
        {"slug": p.slug, "title": p.title, "url": f"{HOME_URL}{p.slug}/"}
        for p in PAGES.values()
        if has_required(permissions, p.required)
    ]


def _base_context(session, permissions: set[str]) -> dict:
    return {
        "session": session,
        "permissions": sorted(permissions),
        "nav": _nav(permissions),
    }


@require_http_methods(["GET", "POST"])
def login_page(request):
    if request.method == "GET":
        if read_session(request) is not None:
            return redirect(HOME_URL)
        return render(request, "dashboard/login.html")

    email = (request.POST.get("email") or "").strip()
    password = request.POST.get("password") or ""
    if not email or not password:
        return render(
            request,
            "dashboard/login.html",
            {"error": "Email y contraseña son requeridos", "email": email},
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        issued = SessionService.login(email=email, password=password, request=request)
    except APIException as e:
        return render(
            request,
            "dashboard/login.html",
            {"error": str(e.detail), "email": email},
            status=e.status_code,
        )

    res = redirect(HOME_URL)
    set_session_cookie(res, issued.token)
    return res


@require_POST
def logout_page(request):
    SessionService.logout(session=read_session(request), request=request)
    res = redirect(LOGIN_URL)
    clear_session_cookie(res)
    return res


def _gate_page(request, entry: Page | None = None):
    """
    Same account check as the API. Returns (auth, denial) where denial is a
    response to send back instead of the page.
    """
    auth = authenticate(request)
    if auth.error_status is None:
        return auth, None

    if auth.error_status == status.HTTP_401_UNAUTHORIZED:
        return auth, redirect(LOGIN_URL)

    if auth.error_status == status.HTTP_404_NOT_FOUND:
        res = redirect(LOGIN_URL)
        clear_session_cookie(res)
        return auth, res

    logger.info("Page access refused for inactive user %s", auth.user_id)
    context = _base_context(auth.session, frozenset())
    context.update({"page": entry, "message": INACTIVE_MSG})
    return auth, render(request, DENIED_TEMPLATE, context, status=status.HTTP_403_FORBIDDEN)


def home(request):
    auth, denial = _gate_page(request)
    if denial is not None:
        return denial

    return render(request, "dashboard/home.html", _base_context(auth.session, auth.permissions))


def page(request, slug: str):
    entry: Page | None = PAGES.get(slug)
    if entry is None:
        raise Http404(slug)

    auth, denial = _gate_page(request, entry)
    if denial is not None:
        return denial

    permissions = auth.permissions
    context = _base_context(auth.session, permissions)
    context["page"] = entry

    if not has_required(permissions, entry.required):
        logger.info("Page %s denied for user %s", slug, auth.user_id)
        return render(request, DENIED_TEMPLATE, context, status=status.HTTP_403_FORBIDDEN)

    q = (request.GET.get("search") or "").strip()
    context.update(
        {
            "search": q,
            "rows": list(entry.rows(q)[:PAGE_ROWS]) if entry.rows else [],
            "can": {name: has_required(permissions, list(codes)) for name, codes in entry.capabilities.items()},
        }
    )
    return render(request, entry.template, context)

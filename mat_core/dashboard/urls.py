# mat_core/dashboard/urls.py
from django.urls import path

from mat_core.dashboard import views

urlpatterns = [
    path("", views.login_page, name="login-page"),
    path("logout/", views.logout_page, name="logout-page"),
    path("dashboard/", views.home, name="dashboard-home"),
    path("dashboard/<slug:slug>/", views.page, name="dashboard-page"),
]

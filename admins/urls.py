from django.urls import re_path

from .views import ChangePasswordView, LoginView, LogoutView, ProfileView, SignupView

urlpatterns = [
    re_path(r'^admin/signup/?$', SignupView.as_view(), name='admin-signup'),
    re_path(r'^admin/login/?$', LoginView.as_view(), name='admin-login'),
    re_path(r'^admin/profile/?$', ProfileView.as_view(), name='admin-profile'),
    re_path(r'^admin/change-password/?$', ChangePasswordView.as_view(), name='admin-change-password'),
    re_path(r'^admin/logout/?$', LogoutView.as_view(), name='admin-logout'),
]

from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # POST      /api/auth/register/  - Sign up, returns profile + tokens
    # POST      /api/auth/login/     - Sign in, returns profile + tokens
    # GET/PATCH /api/auth/user/      - Own profile with company memberships
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('user/', views.current_user, name='current-user'),
]

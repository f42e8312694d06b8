# accounts/urls.py
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # --- Authentication flow ---
    path('', views.role_selector, name='role_selector'),
    path('login/<str:role>/', views.login_account, name='login'),
    path('logout/', views.logout_account, name='logout'),

    # --- Registration ---
    path('register/staff/', views.register_staff, name='register_staff'),
    path('register/student/', views.register_student, name='register_student'),
]

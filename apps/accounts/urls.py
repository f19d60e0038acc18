from django.urls import path

from . import views

app_name = 'accounts'

urlpatterns = [
    # Sign-up, sign-in, sign-out
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('verify-email/', views.verify_email, name='verify-email'),

    # The caller's own account and mess session
    path('me/', views.get_current_user, name='me'),
    path('me/profile/', views.update_profile, name='profile'),

    # Another member's public profile
    path('members/<uuid:pk>/', views.UserDetailView.as_view(), name='member-detail'),
]

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'messes'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.MessViewSet, basename='mess')

urlpatterns = [
    # Mess ViewSet routes
    # GET    /api/messes/              - The caller's mess as a list
    # POST   /api/messes/              - Create mess (onboarding)
    # GET    /api/messes/{code}/       - Mess details (member)
    # PATCH  /api/messes/{code}/       - Update settings (manager)

    # Custom mess actions
    # GET    /api/messes/{code}/members/               - List members
    # POST   /api/messes/{code}/update_member_role/    - Change a role (manager)
    # DELETE /api/messes/{code}/remove_member/         - Remove member (manager)
    # POST   /api/messes/{code}/update_member_rent/    - Set monthly rent (manager)

    # Onboarding and session helpers
    path('join/', views.join, name='join'),
    path('my/', views.my_mess, name='my-mess'),

    # Include router URLs
    path('', include(router.urls)),
]

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'notices'

router = DefaultRouter()
router.register(r'', views.NoticeViewSet, basename='notice')

urlpatterns = [
    # GET  /api/notices/  - List notices (newest first)
    # POST /api/notices/  - Post notice (manager)
    path('', include(router.urls)),
]
